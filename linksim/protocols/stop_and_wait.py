"""
Stop-and-Wait Sender

This module implements a stop-and-wait style exchange: each DATA frame is
followed by a confirmation sent back over the same channel, and the sender
polls its own queue until the confirmation shows up or a deadline passes.

There is no retransmission. A frame whose data leg is lost is reported as
LOST; a frame whose confirmation does not arrive in time is reported as
TIMED_OUT. The sender cannot tell a lost confirmation from a slow one.
"""

from typing import Callable, Optional
import time

from ..arq.frame import Frame
from ..arq.machine import Machine
from ..arq.timer import AckTimer
from ..channel.base import Channel
from ..config import ACK_TIMEOUT, POLL_INTERVAL
from ..utils.logger import SimulationLogger
from ..utils.metrics import ProtocolMetrics
from .base import ProtocolDriver
from .results import FrameResult, Outcome, TransmissionState


class StopAndWaitProtocol(ProtocolDriver):
    """
    Stop-and-wait driver without retransmission.

    Per frame: SENDING -> AWAITING_ACK -> ACKNOWLEDGED or TIMED_OUT,
    or SENDING -> LOST when the data leg is dropped.

    Attributes:
        timer: ACK deadline timer, restarted for every frame
        state: State of the frame currently (or last) in flight
    """

    name = "stop-and-wait"

    def __init__(
        self,
        channel: Channel,
        source: Optional[Machine] = None,
        destination: Optional[Machine] = None,
        timeout: float = ACK_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
        logger: Optional[SimulationLogger] = None,
        metrics: Optional[ProtocolMetrics] = None,
        on_result: Optional[Callable[[FrameResult], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the stop-and-wait driver.

        Args:
            channel: Channel carrying DATA and CONFIRMATION frames
            source: Sending machine
            destination: Receiving machine
            timeout: ACK timeout in seconds
            poll_interval: Sleep between polls in seconds
            logger: Logger instance
            metrics: Metrics collector
            on_result: Callback invoked with each FrameResult
            clock: Returns the current time in seconds
            sleep: Suspends the caller for a number of seconds
        """
        super().__init__(channel, source, destination, logger, metrics, on_result, clock)
        self.timer = AckTimer(timeout, poll_interval, clock=clock, sleep=sleep)
        self.state = TransmissionState.IDLE

    def send_frame(self, frame_id: int, payload: bytes) -> FrameResult:
        """
        Send one DATA frame and wait for its confirmation.

        Args:
            frame_id: Id of the DATA frame
            payload: Frame payload

        Returns:
            FrameResult with LOST, ACKNOWLEDGED or TIMED_OUT
        """
        start = self.clock()
        self.state = TransmissionState.SENDING
        frame = Frame.create_data_frame(frame_id, payload)

        self.logger.frame_sent(frame.id, frame.kind.name, frame.payload_size)
        received = self.channel.transmit(frame, self.source, self.destination)
        self.metrics.record_data_sent(received is not None)

        if received is None:
            self.state = TransmissionState.LOST
            self.logger.frame_lost(frame.id, frame.kind.name)
            return self._finish(FrameResult(frame_id, Outcome.LOST, self.clock() - start))

        self.logger.frame_delivered(received.id, received.kind.name)
        text = received.decode()
        self._confirm(received)

        self.state = TransmissionState.AWAITING_ACK
        if self.wait_for_confirmation(frame_id):
            self.state = TransmissionState.ACKNOWLEDGED
            outcome = Outcome.ACKNOWLEDGED
        else:
            self.state = TransmissionState.TIMED_OUT
            outcome = Outcome.TIMED_OUT

        return self._finish(FrameResult(frame_id, outcome, self.clock() - start, text))

    def _confirm(self, received: Frame):
        """Have the destination answer a DATA frame with a confirmation."""
        ack = Frame.create_confirmation_frame(received.id)
        self.metrics.record_ack_sent()
        self.logger.ack_sent(ack.id)

        # The sender never sees this result; a lost ACK surfaces as a timeout.
        if self.channel.transmit(ack, self.destination, self.source) is None:
            self.logger.frame_lost(ack.id, ack.kind.name)

    def wait_for_confirmation(self, expected_id: int) -> bool:
        """
        Poll the source queue for a confirmation matching ``expected_id``.

        Every popped frame that is not the matching confirmation is dropped.
        The queue is last-in first-out, so a newer unrelated frame is seen
        before an older matching one.

        Args:
            expected_id: Id of the DATA frame awaiting confirmation

        Returns:
            True if the confirmation arrived before the deadline
        """
        timer = self.timer
        timer.start()

        while not timer.check_expired():
            frame = self.source.pop_frame()
            if frame is not None:
                if frame.is_confirmation and frame.id == expected_id:
                    wait = timer.elapsed()
                    timer.stop()
                    self.metrics.record_ack_received(wait)
                    self.logger.ack_received(frame.id, wait)
                    return True
                self.metrics.record_ignored()
                self.logger.ack_ignored(frame.id, frame.kind.name, expected_id)
            timer.wait_step()

        self.metrics.record_timeout()
        self.logger.timeout(expected_id, timer.timeout)
        return False
