"""
Utilities package - Helper functions and classes.

Contains implementations for:
- Protocol metrics
- Logging utilities
"""

from .metrics import ProtocolMetrics
from .logger import SimulationLogger, LogLevel, get_logger, set_logger

__all__ = [
    'ProtocolMetrics',
    'SimulationLogger',
    'LogLevel',
    'get_logger',
    'set_logger'
]
