"""
Protocols package - Drivers built on the channel contract.

Contains implementations for:
- Unconfirmed transmission (utopia)
- Stop-and-wait without retransmission
"""

from .results import FrameResult, Outcome, TransmissionState
from .base import ProtocolDriver
from .utopia import UtopiaProtocol
from .stop_and_wait import StopAndWaitProtocol

__all__ = [
    'FrameResult',
    'Outcome',
    'TransmissionState',
    'ProtocolDriver',
    'UtopiaProtocol',
    'StopAndWaitProtocol'
]
