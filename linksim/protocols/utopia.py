"""
Unconfirmed one-way transmission ("utopia" protocol).

Frames go from source to destination with no acknowledgment, no error
detection and no retransmission. Each frame is either delivered or lost.
"""

from ..arq.frame import Frame
from .base import ProtocolDriver
from .results import FrameResult, Outcome


class UtopiaProtocol(ProtocolDriver):
    """Sends every frame once and reports DELIVERED or LOST."""

    name = "utopia"

    def send_frame(self, frame_id: int, payload: bytes) -> FrameResult:
        start = self.clock()
        frame = Frame.create_data_frame(frame_id, payload)

        self.logger.frame_sent(frame.id, frame.kind.name, frame.payload_size)
        received = self.channel.transmit(frame, self.source, self.destination)
        self.metrics.record_data_sent(received is not None)

        text = None
        if received is None:
            self.logger.frame_lost(frame.id, frame.kind.name)
            outcome = Outcome.LOST
        else:
            self.logger.frame_delivered(received.id, received.kind.name)
            outcome = Outcome.DELIVERED
            text = received.decode()

        return self._finish(FrameResult(frame_id, outcome, self.clock() - start, text))
