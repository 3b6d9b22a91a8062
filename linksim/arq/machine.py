"""
Simulated endpoint holding received frames.
"""

from typing import List, Optional

from .frame import Frame


class Machine:
    """
    A communicating endpoint in a link-layer simulation.

    Frames delivered by a channel are appended to ``frames``. Consumption
    is last-in first-out: ``pop_frame`` returns the most recently received
    frame, so an older frame waits behind any newer arrival.

    Attributes:
        name: Label used in log messages
        frames: Frames received but not yet consumed
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.frames: List[Frame] = []

    def push_frame(self, frame: Frame):
        """Store a delivered frame."""
        self.frames.append(frame)

    def pop_frame(self) -> Optional[Frame]:
        """
        Remove and return the most recently received frame.

        Returns:
            Frame, or None if nothing is queued
        """
        if not self.frames:
            return None
        return self.frames.pop()

    def peek_frame(self) -> Optional[Frame]:
        """Return the frame ``pop_frame`` would return, without removing it."""
        return self.frames[-1] if self.frames else None

    def clear(self):
        """Drop every queued frame."""
        self.frames.clear()

    @property
    def is_empty(self) -> bool:
        """Check if no frame is queued."""
        return len(self.frames) == 0

    def __len__(self) -> int:
        return len(self.frames)

    def __repr__(self) -> str:
        return f"Machine(name={self.name!r}, queued={len(self.frames)})"
