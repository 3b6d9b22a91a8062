"""
Unit tests for the stop-and-wait driver and its ACK timer.
"""

from typing import Optional

import pytest

from linksim.arq.frame import Frame, FrameKind
from linksim.arq.machine import Machine
from linksim.arq.timer import AckTimer, TimerState
from linksim.channel import Channel, IdealChannel, NoisyChannel
from linksim.protocols import Outcome, StopAndWaitProtocol, TransmissionState


class RecordingChannel(Channel):
    """Wraps a channel and records every call."""

    def __init__(self, inner: Channel):
        self.inner = inner
        self.calls = []

    def transmit(self, frame: Frame, source: Machine, destination: Machine) -> Optional[Frame]:
        self.calls.append((frame, source, destination))
        return self.inner.transmit(frame, source, destination)


class DropConfirmationsChannel(Channel):
    """Delivers DATA frames and loses every confirmation."""

    def transmit(self, frame: Frame, source: Machine, destination: Machine) -> Optional[Frame]:
        if frame.is_confirmation:
            return None
        destination.push_frame(frame.copy())
        return frame


class LateNoiseChannel(Channel):
    """Delivers everything, then buries each confirmation under an unrelated one."""

    def transmit(self, frame: Frame, source: Machine, destination: Machine) -> Optional[Frame]:
        destination.push_frame(frame.copy())
        if frame.is_confirmation:
            destination.push_frame(Frame.create_confirmation_frame(200))
        return frame


class TestAckTimer:
    """Tests for AckTimer."""

    def test_start_and_expire(self, fake_clock):
        """Test expiry once the timeout has elapsed."""
        timer = AckTimer(0.5, 0.1, clock=fake_clock, sleep=fake_clock.sleep)
        assert timer.state == TimerState.STOPPED
        assert not timer.check_expired()

        timer.start()
        assert not timer.check_expired()
        assert timer.get_remaining_time() == pytest.approx(0.5)

        fake_clock.now = 0.5
        assert timer.check_expired()
        assert timer.state == TimerState.EXPIRED
        assert timer.get_remaining_time() == 0.0

    def test_stop(self, fake_clock):
        """Test that a stopped timer never expires."""
        timer = AckTimer(0.1, 0.01, clock=fake_clock, sleep=fake_clock.sleep)
        timer.start()
        timer.stop()

        fake_clock.now = 10.0
        assert not timer.check_expired()

    def test_wait_step_sleeps_poll_interval(self, fake_clock):
        """Test that one wait step sleeps exactly one interval."""
        timer = AckTimer(1.0, 0.25, clock=fake_clock, sleep=fake_clock.sleep)
        timer.start()

        timer.wait_step()

        assert fake_clock.sleeps == [0.25]
        assert timer.elapsed() == pytest.approx(0.25)

    @pytest.mark.parametrize("timeout, interval", [(-1.0, 0.01), (0.5, 0.0), (0.5, -0.1)])
    def test_invalid_settings(self, timeout, interval):
        """Test constructor validation."""
        with pytest.raises(ValueError):
            AckTimer(timeout, interval)


class TestStopAndWait:
    """Tests for StopAndWaitProtocol."""

    def test_ideal_channel_acknowledges_every_frame(self, quiet_logger):
        """Test three frames over a perfect channel with a 500 ms timeout."""
        protocol = StopAndWaitProtocol(IdealChannel(), timeout=0.5)

        results = protocol.run("hi", count=3)

        assert [r.frame_id for r in results] == [0, 1, 2]
        assert all(r.outcome == Outcome.ACKNOWLEDGED for r in results)
        assert protocol.metrics.timeouts == 0
        assert protocol.state == TransmissionState.ACKNOWLEDGED

    def test_ideal_channel_leaves_data_at_destination(self, quiet_logger):
        """Test that confirmations are consumed and DATA frames stay queued."""
        protocol = StopAndWaitProtocol(IdealChannel())

        protocol.run("hi", count=3)

        assert protocol.source.is_empty
        assert len(protocol.destination) == 3
        assert protocol.destination.pop_frame().decode() == "hi"

    def test_forced_loss_reports_lost_without_ack_leg(self, quiet_logger, fake_clock):
        """Test that a dead channel loses every frame and never sends an ACK."""
        channel = RecordingChannel(NoisyChannel(0.0, seed=1))
        protocol = StopAndWaitProtocol(channel, clock=fake_clock, sleep=fake_clock.sleep)

        results = protocol.run("hi", count=3)

        assert all(r.outcome == Outcome.LOST for r in results)
        assert len(channel.calls) == 3
        assert all(frame.kind == FrameKind.DATA for frame, _, _ in channel.calls)
        assert all(src is protocol.source for _, src, _ in channel.calls)
        assert protocol.metrics.acks_sent == 0
        assert fake_clock.sleeps == []

    def test_ack_leg_goes_back_over_same_channel(self, quiet_logger):
        """Test the confirmation travels destination to source."""
        channel = RecordingChannel(IdealChannel())
        protocol = StopAndWaitProtocol(channel)

        protocol.send_frame(5, b"x")

        (data, src1, dst1), (ack, src2, dst2) = channel.calls
        assert data.kind == FrameKind.DATA and data.id == 5
        assert ack.kind == FrameKind.CONFIRMATION and ack.id == 5 and ack.data == b""
        assert (src1, dst1) == (protocol.source, protocol.destination)
        assert (src2, dst2) == (protocol.destination, protocol.source)

    def test_lost_confirmation_times_out(self, quiet_logger, fake_clock):
        """Test that a lost ACK is reported as a timeout."""
        protocol = StopAndWaitProtocol(
            DropConfirmationsChannel(), timeout=0.5, poll_interval=0.01,
            clock=fake_clock, sleep=fake_clock.sleep
        )

        result = protocol.send_frame(0, b"hi")

        assert result.outcome == Outcome.TIMED_OUT
        assert protocol.state == TransmissionState.TIMED_OUT
        assert result.elapsed >= 0.5
        assert all(s == 0.01 for s in fake_clock.sleeps)
        assert protocol.metrics.timeouts == 1
        assert protocol.metrics.acks_sent == 1
        assert protocol.metrics.acks_received == 0

    def test_timed_out_frame_is_not_retried(self, quiet_logger, fake_clock):
        """Test that every id is sent exactly once."""
        channel = RecordingChannel(DropConfirmationsChannel())
        protocol = StopAndWaitProtocol(channel, timeout=0.05,
                                       clock=fake_clock, sleep=fake_clock.sleep)

        results = protocol.run("hi", count=2)

        assert [r.outcome for r in results] == [Outcome.TIMED_OUT, Outcome.TIMED_OUT]
        data_ids = [f.id for f, _, _ in channel.calls if f.kind == FrameKind.DATA]
        assert data_ids == [0, 1]

    def test_unrelated_confirmation_is_dropped(self, quiet_logger, fake_clock):
        """Test that a newer unrelated ACK is consumed before the matching one."""
        protocol = StopAndWaitProtocol(LateNoiseChannel(), timeout=0.5,
                                       clock=fake_clock, sleep=fake_clock.sleep)

        result = protocol.send_frame(1, b"hi")

        assert result.outcome == Outcome.ACKNOWLEDGED
        assert protocol.metrics.frames_ignored == 1
        assert protocol.source.is_empty
        # One poll found the unrelated ACK, the next one the match.
        assert fake_clock.sleeps == [0.01]

    def test_wait_ignores_data_frame_with_same_id(self, quiet_logger, fake_clock):
        """Test that only CONFIRMATION frames count."""
        protocol = StopAndWaitProtocol(IdealChannel(), timeout=0.05,
                                       clock=fake_clock, sleep=fake_clock.sleep)
        protocol.source.push_frame(Frame(4, b"", FrameKind.DATA))

        assert not protocol.wait_for_confirmation(4)
        assert protocol.metrics.frames_ignored == 1
        assert protocol.source.is_empty

    def test_newer_frames_are_popped_first(self, quiet_logger, fake_clock):
        """Test that an older matching ACK waits behind newer unrelated frames."""
        protocol = StopAndWaitProtocol(IdealChannel(), timeout=0.5,
                                       clock=fake_clock, sleep=fake_clock.sleep)
        protocol.source.push_frame(Frame.create_confirmation_frame(1))
        protocol.source.push_frame(Frame.create_confirmation_frame(7))
        protocol.source.push_frame(Frame.create_confirmation_frame(8))

        assert protocol.wait_for_confirmation(1)
        assert protocol.metrics.frames_ignored == 2
        assert len(fake_clock.sleeps) == 2

    def test_zero_timeout_never_polls(self, quiet_logger, fake_clock):
        """Test that a zero deadline expires before the first poll."""
        protocol = StopAndWaitProtocol(IdealChannel(), timeout=0.0,
                                       clock=fake_clock, sleep=fake_clock.sleep)
        protocol.source.push_frame(Frame.create_confirmation_frame(0))

        assert not protocol.wait_for_confirmation(0)
        assert len(protocol.source) == 1

    def test_ack_wait_recorded(self, quiet_logger):
        """Test that received ACKs add wait samples."""
        protocol = StopAndWaitProtocol(IdealChannel())

        protocol.run(b"\x00\x01", count=4)

        stats = protocol.metrics.get_ack_wait_statistics()
        assert stats['samples'] == 4
        assert stats['max'] < 0.5

    def test_on_result_callback(self, quiet_logger):
        """Test that the callback sees each result in order."""
        seen = []
        protocol = StopAndWaitProtocol(IdealChannel(), on_result=seen.append)

        results = protocol.run("hi", count=3)

        assert seen == results == protocol.results

    def test_frame_ids_wrap(self, quiet_logger):
        """Test that ids stay in the byte range."""
        protocol = StopAndWaitProtocol(IdealChannel())

        results = protocol.run("hi", count=3, start_id=254)

        assert [r.frame_id for r in results] == [254, 255, 0]

    def test_result_text_from_delivered_frame(self, quiet_logger, fake_clock):
        """Test that the decoded payload is reported even on a timeout."""
        protocol = StopAndWaitProtocol(DropConfirmationsChannel(), timeout=0.05,
                                       clock=fake_clock, sleep=fake_clock.sleep)

        result = protocol.send_frame(0, "caf\u00e9".encode("utf-8"))

        assert result.outcome == Outcome.TIMED_OUT
        assert result.text == "caf\u00e9"

    def test_one_timer_per_driver(self, quiet_logger, fake_clock):
        """Test that the ACK timer is built once and restarted per frame."""
        protocol = StopAndWaitProtocol(IdealChannel(), timeout=0.3, poll_interval=0.02,
                                       clock=fake_clock, sleep=fake_clock.sleep)
        timer = protocol.timer

        protocol.run("hi", count=3)

        assert protocol.timer is timer
        assert (timer.timeout, timer.poll_interval) == (0.3, 0.02)
        assert timer.state == TimerState.STOPPED

    def test_invalid_configuration(self):
        """Test constructor and run validation."""
        with pytest.raises(ValueError):
            StopAndWaitProtocol(IdealChannel(), timeout=-1)
        with pytest.raises(ValueError):
            StopAndWaitProtocol(IdealChannel(), poll_interval=0)
        with pytest.raises(ValueError):
            StopAndWaitProtocol(IdealChannel()).run("hi", count=-1)

    def test_works_with_any_channel(self, quiet_logger, fake_clock):
        """Test a seeded noisy channel produces a mix of outcomes reproducibly."""
        def run_once():
            protocol = StopAndWaitProtocol(NoisyChannel(0.5, seed=5), timeout=0.05,
                                           clock=fake_clock, sleep=fake_clock.sleep)
            return [r.outcome for r in protocol.run("hi", count=40)]

        first = run_once()

        assert first == run_once()
        assert Outcome.LOST in first
        assert Outcome.ACKNOWLEDGED in first
        assert Outcome.TIMED_OUT in first


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
