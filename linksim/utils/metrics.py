"""
Metrics Collection

This module tracks per-run counters for the protocol drivers:
frames delivered and lost, confirmations and timeouts.
"""

from typing import List
import statistics


class ProtocolMetrics:
    """
    Collects counters for a single protocol run.

    Channels keep no record of lost frames, so loss is counted here,
    from what the driver observes.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        """Reset all counters."""
        # Data leg
        self.data_frames_sent = 0
        self.data_frames_delivered = 0
        self.data_frames_lost = 0

        # Confirmation leg
        self.acks_sent = 0
        self.acks_received = 0
        self.frames_ignored = 0
        self.timeouts = 0

        # Time from sending an ACK to observing it at the sender
        self.ack_wait_samples: List[float] = []

    def record_data_sent(self, delivered: bool):
        """Record one transmission on the data leg."""
        self.data_frames_sent += 1
        if delivered:
            self.data_frames_delivered += 1
        else:
            self.data_frames_lost += 1

    def record_ack_sent(self):
        """Record one confirmation handed to the channel."""
        self.acks_sent += 1

    def record_ack_received(self, wait: float):
        """Record a matching confirmation."""
        self.acks_received += 1
        self.ack_wait_samples.append(wait)

    def record_ignored(self):
        """Record a popped frame that was not the awaited confirmation."""
        self.frames_ignored += 1

    def record_timeout(self):
        """Record an ACK wait that hit its deadline."""
        self.timeouts += 1

    @property
    def delivery_ratio(self) -> float:
        """Fraction of data frames that crossed the channel."""
        if self.data_frames_sent == 0:
            return 0.0
        return self.data_frames_delivered / self.data_frames_sent

    @property
    def ack_ratio(self) -> float:
        """Fraction of data frames that were acknowledged."""
        if self.data_frames_sent == 0:
            return 0.0
        return self.acks_received / self.data_frames_sent

    def get_ack_wait_statistics(self) -> dict:
        """Get ACK wait statistics."""
        if not self.ack_wait_samples:
            return {'samples': 0, 'mean': 0.0, 'min': 0.0, 'max': 0.0, 'stdev': 0.0}

        return {
            'samples': len(self.ack_wait_samples),
            'mean': statistics.mean(self.ack_wait_samples),
            'min': min(self.ack_wait_samples),
            'max': max(self.ack_wait_samples),
            'stdev': (statistics.stdev(self.ack_wait_samples)
                      if len(self.ack_wait_samples) > 1 else 0.0),
        }

    def get_summary(self) -> dict:
        """
        Get all counters and derived ratios.

        Returns:
            Dictionary with metrics
        """
        return {
            'data_frames_sent': self.data_frames_sent,
            'data_frames_delivered': self.data_frames_delivered,
            'data_frames_lost': self.data_frames_lost,
            'acks_sent': self.acks_sent,
            'acks_received': self.acks_received,
            'frames_ignored': self.frames_ignored,
            'timeouts': self.timeouts,
            'delivery_ratio': self.delivery_ratio,
            'ack_ratio': self.ack_ratio,
            'ack_wait': self.get_ack_wait_statistics(),
        }
