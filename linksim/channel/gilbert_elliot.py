"""
Gilbert-Elliott Burst Loss Channel Model

This module implements the two-state Markov chain model for simulating
bursts of frame loss. The channel alternates between a "Good" state
(most frames delivered) and a "Bad" state (most frames lost).
"""

import numpy as np
from enum import Enum
from typing import Tuple, List, Optional

from ..arq.frame import Frame
from ..arq.machine import Machine
from ..config import (
    GOOD_STATE_DELIVERY, BAD_STATE_DELIVERY,
    P_GOOD_TO_BAD, P_BAD_TO_GOOD,
    calculate_steady_state_probabilities
)
from ..utils.logger import SimulationLogger, get_logger
from .base import Channel


class ChannelState(Enum):
    """Channel state enumeration."""
    GOOD = 0
    BAD = 1


class GilbertElliottChannel(Channel):
    """
    Gilbert-Elliott two-state Markov channel model at frame granularity.

    Each state has its own delivery probability. The state may change once
    after every transmitted frame, so losses come in bursts.

    Attributes:
        dg: Delivery probability in Good state
        db: Delivery probability in Bad state
        p_gb: Transition probability from Good to Bad
        p_bg: Transition probability from Bad to Good
        state: Current channel state
        rng: Random number generator
    """

    def __init__(
        self,
        dg: float = GOOD_STATE_DELIVERY,
        db: float = BAD_STATE_DELIVERY,
        p_gb: float = P_GOOD_TO_BAD,
        p_bg: float = P_BAD_TO_GOOD,
        seed: Optional[int] = None,
        initial_state: Optional[ChannelState] = None,
        logger: Optional[SimulationLogger] = None
    ):
        """
        Initialize the Gilbert-Elliott channel.

        Args:
            dg: Delivery probability in Good state (default from config)
            db: Delivery probability in Bad state (default from config)
            p_gb: Probability of transitioning from Good to Bad
            p_bg: Probability of transitioning from Bad to Good
            seed: Random seed for reproducibility
            initial_state: Starting state (drawn from steady state if None)
            logger: Logger instance (defaults to the global logger)
        """
        self.dg = dg
        self.db = db
        self.p_gb = p_gb
        self.p_bg = p_bg
        self.logger = logger or get_logger()

        self.rng = np.random.default_rng(seed)

        if initial_state is None:
            self._initialize_state()
        else:
            self.state = initial_state

        # Statistics tracking
        self.frames_seen = 0
        self.state_transitions = 0
        self.time_in_good = 0
        self.time_in_bad = 0

    def _initialize_state(self):
        """Initialize channel state based on steady-state probabilities."""
        pi_good, _ = self.get_steady_state_probabilities()
        if self.rng.random() < pi_good:
            self.state = ChannelState.GOOD
        else:
            self.state = ChannelState.BAD

    def get_steady_state_probabilities(self) -> Tuple[float, float]:
        """
        Calculate steady-state probabilities for Good and Bad states.

        Returns:
            Tuple of (π_Good, π_Bad)
        """
        return calculate_steady_state_probabilities(self.p_gb, self.p_bg)

    def get_average_delivery_rate(self) -> float:
        """
        Calculate the long-run delivery rate.

        Returns:
            Average delivery probability
        """
        pi_good, pi_bad = self.get_steady_state_probabilities()
        return pi_good * self.dg + pi_bad * self.db

    def get_current_delivery_rate(self) -> float:
        """Get the delivery probability for the current channel state."""
        return self.dg if self.state == ChannelState.GOOD else self.db

    def transition_state(self):
        """Perform a state transition based on transition probabilities."""
        if self.state == ChannelState.GOOD:
            self.time_in_good += 1
            if self.rng.random() < self.p_gb:
                self.state = ChannelState.BAD
                self.state_transitions += 1
                self.logger.channel_state(self.state.name, self.db)
        else:
            self.time_in_bad += 1
            if self.rng.random() < self.p_bg:
                self.state = ChannelState.GOOD
                self.state_transitions += 1
                self.logger.channel_state(self.state.name, self.dg)

    def transmit(
        self,
        frame: Frame,
        source: Machine,
        destination: Machine
    ) -> Optional[Frame]:
        delivered = self.rng.random() < self.get_current_delivery_rate()
        self.frames_seen += 1
        self.transition_state()

        if delivered:
            return self._deliver(frame, destination)
        return None

    def get_statistics(self) -> dict:
        """
        Get channel state statistics.

        Returns:
            Dictionary with state statistics
        """
        total_time = self.time_in_good + self.time_in_bad

        return {
            'frames_seen': self.frames_seen,
            'state_transitions': self.state_transitions,
            'time_in_good': self.time_in_good,
            'time_in_bad': self.time_in_bad,
            'fraction_in_good': (self.time_in_good / total_time
                                 if total_time > 0 else 0),
            'theoretical_delivery_rate': self.get_average_delivery_rate()
        }

    def reset(self, seed: Optional[int] = None):
        """
        Reset the channel to initial state.

        Args:
            seed: New random seed (optional)
        """
        if seed is not None:
            self.rng = np.random.default_rng(seed)
        self._initialize_state()
        self.frames_seen = 0
        self.state_transitions = 0
        self.time_in_good = 0
        self.time_in_bad = 0

    def __repr__(self) -> str:
        return (f"GilbertElliottChannel(dg={self.dg}, db={self.db}, "
                f"p_gb={self.p_gb}, p_bg={self.p_bg}, state={self.state.name})")


def analyze_burst_lengths(loss_pattern: List[bool]) -> dict:
    """
    Analyze burst lengths in a loss pattern.

    Args:
        loss_pattern: List of frame loss indicators (True = lost)

    Returns:
        Dictionary with burst statistics
    """
    bursts = []
    current_burst = 0

    for lost in loss_pattern:
        if lost:
            current_burst += 1
        elif current_burst > 0:
            bursts.append(current_burst)
            current_burst = 0

    if current_burst > 0:
        bursts.append(current_burst)

    if bursts:
        return {
            'avg_burst_length': float(np.mean(bursts)),
            'max_burst_length': max(bursts),
            'num_bursts': len(bursts),
            'burst_lengths': bursts
        }
    return {'avg_burst_length': 0, 'max_burst_length': 0, 'num_bursts': 0}
