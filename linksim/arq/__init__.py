"""
ARQ package - Link-layer data model.

Contains implementations for:
- Frame structure and checksum
- Machine (endpoint frame queue)
- Acknowledgment timer
"""

from .frame import Frame, FrameKind
from .machine import Machine
from .timer import AckTimer, TimerState

__all__ = [
    'Frame',
    'FrameKind',
    'Machine',
    'AckTimer',
    'TimerState'
]
