"""
Shared plumbing for the protocol drivers.

A driver owns a channel and two machines and sends a message as a series
of frames with consecutive ids, one ``FrameResult`` per frame.
"""

from typing import Callable, List, Optional, Union
import time

from ..arq.machine import Machine
from ..channel.base import Channel
from ..config import DEFAULT_FRAME_COUNT, MAX_FRAME_ID
from ..utils.logger import SimulationLogger, get_logger
from ..utils.metrics import ProtocolMetrics
from .results import FrameResult


class ProtocolDriver:
    """
    Base class for protocol drivers.

    Subclasses implement ``send_frame``. The channel is only used through
    ``Channel.transmit``, so any loss model can be plugged in.

    Attributes:
        channel: Channel used for every transmission
        source: Sending machine
        destination: Receiving machine
        metrics: Counters for this driver
        results: Results of every frame sent so far
    """

    name = "protocol"

    def __init__(
        self,
        channel: Channel,
        source: Optional[Machine] = None,
        destination: Optional[Machine] = None,
        logger: Optional[SimulationLogger] = None,
        metrics: Optional[ProtocolMetrics] = None,
        on_result: Optional[Callable[[FrameResult], None]] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the driver.

        Args:
            channel: Channel carrying frames in both directions
            source: Sending machine (a new one if None)
            destination: Receiving machine (a new one if None)
            logger: Logger instance (defaults to the global logger)
            metrics: Metrics collector (a new one if None)
            on_result: Callback invoked with each FrameResult
            clock: Returns the current time in seconds
        """
        self.channel = channel
        self.source = source if source is not None else Machine("source")
        self.destination = destination if destination is not None else Machine("destination")
        self.logger = logger or get_logger()
        self.metrics = metrics if metrics is not None else ProtocolMetrics()
        self.on_result = on_result
        self.clock = clock

        self.results: List[FrameResult] = []

    def send_frame(self, frame_id: int, payload: bytes) -> FrameResult:
        """Send one frame and report its outcome."""
        raise NotImplementedError

    def run(
        self,
        message: Union[str, bytes],
        count: int = DEFAULT_FRAME_COUNT,
        start_id: int = 0
    ) -> List[FrameResult]:
        """
        Send ``count`` frames carrying ``message``.

        Ids start at ``start_id`` and wrap after MAX_FRAME_ID.

        Args:
            message: Payload, encoded as UTF-8 if given as text
            count: Number of frames to send
            start_id: Id of the first frame

        Returns:
            One FrameResult per frame, in sending order
        """
        if count < 0:
            raise ValueError("Frame count must be non-negative")

        payload = message.encode('utf-8') if isinstance(message, str) else bytes(message)

        self.logger.simulation_start({
            'protocol': self.name,
            'channel': repr(self.channel),
            'frames': count,
        })

        results = []
        for i in range(count):
            frame_id = (start_id + i) % (MAX_FRAME_ID + 1)
            results.append(self.send_frame(frame_id, payload))

        self.logger.simulation_end(self.metrics.get_summary())
        return results

    def _finish(self, result: FrameResult) -> FrameResult:
        self.results.append(result)
        if self.on_result:
            self.on_result(result)
        return result
