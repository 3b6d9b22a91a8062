"""
Simulation Logger

This module provides logging utilities for the simulator,
with configurable verbosity levels and structured output.
"""

from typing import Optional, TextIO
from datetime import datetime
from enum import IntEnum
import os

from ..config import DEFAULT_LOG_LEVEL


class LogLevel(IntEnum):
    """Log level enumeration."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


class SimulationLogger:
    """
    Logger for simulation events.

    Provides structured logging with timestamps and categories.

    Attributes:
        name: Logger name
        level: Minimum log level
        file: Optional file for logging
    """

    # Color codes for terminal output
    COLORS = {
        LogLevel.DEBUG: '\033[36m',     # Cyan
        LogLevel.INFO: '\033[32m',      # Green
        LogLevel.WARNING: '\033[33m',   # Yellow
        LogLevel.ERROR: '\033[31m',     # Red
        LogLevel.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(
        self,
        name: str = "linksim",
        level: int = DEFAULT_LOG_LEVEL,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        include_timestamp: bool = True
    ):
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Minimum log level
            log_file: Optional file path for logging
            use_colors: Use ANSI colors in output
            include_timestamp: Include timestamps in log messages
        """
        self.name = name
        self.level = level
        self.use_colors = use_colors
        self.include_timestamp = include_timestamp

        self.file: Optional[TextIO] = None
        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            self.file = open(log_file, 'w')

        # Message counts
        self.message_counts = {level: 0 for level in LogLevel}

    def set_level(self, level: int):
        """Set minimum log level."""
        self.level = level

    def _format_message(
        self,
        level: LogLevel,
        message: str,
        category: Optional[str] = None
    ) -> str:
        """Format a log message."""
        parts = []

        if self.include_timestamp:
            parts.append(f"[{datetime.now().strftime('%H:%M:%S.%f')[:-3]}]")

        level_str = level.name.ljust(8)
        if self.use_colors:
            level_str = f"{self.COLORS[level]}{level_str}{self.RESET}"
        parts.append(level_str)

        parts.append(f"[{self.name}]")

        if category:
            parts.append(f"[{category}]")

        parts.append(message)

        return " ".join(parts)

    def _log(
        self,
        level: LogLevel,
        message: str,
        category: Optional[str] = None
    ):
        """Log a message."""
        if level < self.level:
            return

        self.message_counts[level] += 1
        formatted = self._format_message(level, message, category)

        print(formatted)

        if self.file:
            # Strip color codes for file
            clean = formatted
            for color in self.COLORS.values():
                clean = clean.replace(color, '')
            clean = clean.replace(self.RESET, '')
            self.file.write(clean + '\n')
            self.file.flush()

    def debug(self, message: str, category: Optional[str] = None):
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, category)

    def info(self, message: str, category: Optional[str] = None):
        """Log info message."""
        self._log(LogLevel.INFO, message, category)

    def warning(self, message: str, category: Optional[str] = None):
        """Log warning message."""
        self._log(LogLevel.WARNING, message, category)

    def error(self, message: str, category: Optional[str] = None):
        """Log error message."""
        self._log(LogLevel.ERROR, message, category)

    def critical(self, message: str, category: Optional[str] = None):
        """Log critical message."""
        self._log(LogLevel.CRITICAL, message, category)

    # Convenience methods for simulation events
    def frame_sent(self, frame_id: int, kind: str, size: int):
        """Log frame sent event."""
        self.debug(f"Frame {frame_id} ({kind}) sent, size={size}B", "TX")

    def frame_delivered(self, frame_id: int, kind: str):
        """Log frame delivered event."""
        self.debug(f"Frame {frame_id} ({kind}) delivered", "RX")

    def frame_lost(self, frame_id: int, kind: str):
        """Log frame lost event."""
        self.info(f"Frame {frame_id} ({kind}) lost in channel", "LOSS")

    def ack_sent(self, ack_id: int):
        """Log ACK sent event."""
        self.debug(f"ACK {ack_id} sent", "ACK")

    def ack_received(self, ack_id: int, wait: float):
        """Log ACK received event."""
        self.debug(f"ACK {ack_id} received after {wait * 1000:.1f} ms", "ACK")

    def ack_ignored(self, frame_id: int, kind: str, expected_id: int):
        """Log a frame dropped while waiting for another confirmation."""
        self.debug(f"Dropped frame {frame_id} ({kind}) while waiting for ACK {expected_id}",
                   "ACK")

    def timeout(self, frame_id: int, timeout: float):
        """Log timeout event."""
        self.warning(f"Timeout for frame {frame_id} after {timeout * 1000:.0f} ms", "TIMEOUT")

    def channel_state(self, state: str, delivery: float):
        """Log channel state change."""
        self.debug(f"Channel state: {state}, delivery={delivery:.2f}", "CHANNEL")

    def simulation_start(self, params: dict):
        """Log simulation start."""
        param_str = ", ".join(f"{k}={v}" for k, v in params.items())
        self.info(f"Simulation started: {param_str}", "SIM")

    def simulation_end(self, summary: dict):
        """Log simulation end."""
        self.info(f"Simulation ended: delivered={summary.get('data_frames_delivered', 0)}, "
                  f"acked={summary.get('acks_received', 0)}, "
                  f"timeouts={summary.get('timeouts', 0)}", "SIM")

    def get_summary(self) -> dict:
        """Get logging summary."""
        return {
            'message_counts': dict(self.message_counts),
            'total_messages': sum(self.message_counts.values())
        }

    def close(self):
        """Close log file if open."""
        if self.file:
            self.file.close()
            self.file = None

    def __del__(self):
        """Cleanup on deletion."""
        self.close()


# Global logger instance
_global_logger: Optional[SimulationLogger] = None


def get_logger() -> SimulationLogger:
    """Get global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SimulationLogger()
    return _global_logger


def set_logger(logger: SimulationLogger):
    """Set global logger instance."""
    global _global_logger
    _global_logger = logger
