"""
Shared fixtures for the simulator tests.
"""

import pytest

from linksim.utils.logger import SimulationLogger, LogLevel, get_logger, set_logger


class FakeClock:
    """Manual clock: time only moves when ``sleep`` is called."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def quiet_logger():
    """Logger that keeps counts but prints nothing below ERROR."""
    logger = SimulationLogger(name="test", level=LogLevel.ERROR, use_colors=False)
    previous = get_logger()
    set_logger(logger)
    yield logger
    set_logger(previous)
