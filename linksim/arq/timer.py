"""
Acknowledgment Timer for Stop-and-Wait

This module provides the deadline timer used while a sender waits for a
confirmation. It reads a wall clock (``time.monotonic`` by default); the
clock and the sleep function can be swapped for tests.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import time


class TimerState(Enum):
    """Timer state enumeration."""
    STOPPED = 0
    RUNNING = 1
    EXPIRED = 2


@dataclass
class AckTimer:
    """
    Deadline timer for one outstanding frame.

    Attributes:
        timeout: Timeout duration in seconds
        poll_interval: Sleep between two polls in seconds
        clock: Returns the current time in seconds
        sleep: Suspends the caller for a number of seconds
        start_time: Time when the timer was started
        state: Current timer state
    """
    timeout: float
    poll_interval: float
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    start_time: float = 0.0
    state: TimerState = TimerState.STOPPED

    def __post_init__(self):
        """Validate timer settings."""
        if self.timeout < 0:
            raise ValueError("Timeout must be non-negative")
        if self.poll_interval <= 0:
            raise ValueError("Poll interval must be positive")

    def start(self):
        """Start the timer."""
        self.start_time = self.clock()
        self.state = TimerState.RUNNING

    def stop(self):
        """Stop the timer."""
        self.state = TimerState.STOPPED

    def elapsed(self) -> float:
        """Get time since the timer was started."""
        return self.clock() - self.start_time

    def check_expired(self) -> bool:
        """
        Check if the timer has expired.

        Returns:
            True if the timer has expired
        """
        if self.state == TimerState.EXPIRED:
            return True
        if self.state != TimerState.RUNNING:
            return False

        if self.elapsed() >= self.timeout:
            self.state = TimerState.EXPIRED
            return True

        return False

    def get_remaining_time(self) -> float:
        """
        Get remaining time until expiration.

        Returns:
            Remaining time in seconds (0 if expired or stopped)
        """
        if self.state != TimerState.RUNNING:
            return 0.0
        return max(0.0, self.timeout - self.elapsed())

    def wait_step(self):
        """Sleep for one poll interval."""
        self.sleep(self.poll_interval)
