"""
Abstract communication channel between two machines.

Concrete channels decide whether a frame reaches its destination. They are
meant for simulation only and do not model a real physical medium.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..arq.frame import Frame
from ..arq.machine import Machine


class Channel(ABC):
    """
    Frame transport with a loss model.

    A channel is not bound to a pair of machines: the same instance is
    reused for both directions, with source and destination given per call.
    """

    @abstractmethod
    def transmit(
        self,
        frame: Frame,
        source: Machine,
        destination: Machine
    ) -> Optional[Frame]:
        """
        Transmit a frame from ``source`` to ``destination``.

        Args:
            frame: Frame to send
            source: Sending machine (not modified)
            destination: Receiving machine

        Returns:
            The frame if it was delivered (the destination holds a copy),
            or None if it was lost (the destination is untouched)
        """

    @staticmethod
    def _deliver(frame: Frame, destination: Machine) -> Frame:
        destination.push_frame(frame.copy())
        return frame
