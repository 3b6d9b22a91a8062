"""
Perfect channel with no loss, corruption or delay.
"""

from typing import Optional

from ..arq.frame import Frame
from ..arq.machine import Machine
from .base import Channel


class IdealChannel(Channel):
    """Delivers every frame intact and immediately."""

    def transmit(
        self,
        frame: Frame,
        source: Machine,
        destination: Machine
    ) -> Optional[Frame]:
        return self._deliver(frame, destination)

    def __repr__(self) -> str:
        return "IdealChannel()"
