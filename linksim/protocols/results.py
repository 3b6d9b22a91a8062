"""
Per-frame outcomes reported by the protocol drivers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Outcome(Enum):
    """What happened to one logical frame transmission."""
    DELIVERED = "delivered"        # unconfirmed send reached the destination
    LOST = "lost"                  # data leg dropped by the channel
    ACKNOWLEDGED = "acknowledged"  # matching confirmation seen in time
    TIMED_OUT = "timed_out"        # no matching confirmation before deadline


class TransmissionState(Enum):
    """Stop-and-wait state for the frame in flight."""
    IDLE = 0
    SENDING = 1
    AWAITING_ACK = 2
    ACKNOWLEDGED = 3
    TIMED_OUT = 4
    LOST = 5


@dataclass
class FrameResult:
    """
    Result of one logical frame transmission.

    Attributes:
        frame_id: Id of the DATA frame
        outcome: Final outcome
        elapsed: Wall-clock seconds spent on this frame
        text: Payload of the frame that reached the destination, decoded
            as UTF-8; None when the data leg was lost
    """
    frame_id: int
    outcome: Outcome
    elapsed: float = 0.0
    text: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """True for DELIVERED and ACKNOWLEDGED."""
        return self.outcome in (Outcome.DELIVERED, Outcome.ACKNOWLEDGED)
