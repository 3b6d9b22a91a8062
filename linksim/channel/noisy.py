"""
Unreliable channel that drops frames at random.

Each call makes a single Bernoulli draw. Loss is stateless: the channel does
not count or remember the frames it dropped.
"""

import numpy as np
from typing import Optional

from ..arq.frame import Frame
from ..arq.machine import Machine
from ..config import DEFAULT_DELIVERY_RATE
from ..utils.logger import SimulationLogger, get_logger
from .base import Channel


class NoisyChannel(Channel):
    """
    Channel that loses frames with a fixed probability.

    Attributes:
        error_rate: Probability that a frame is DELIVERED (0.0 to 1.0).
            The name is kept for compatibility; 0.7 means 70% of frames
            get through.
        rng: numpy random generator used for the draws
    """

    def __init__(
        self,
        error_rate: float = DEFAULT_DELIVERY_RATE,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        logger: Optional[SimulationLogger] = None
    ):
        """
        Initialize the noisy channel.

        Args:
            error_rate: Delivery probability, expected in [0.0, 1.0]
            seed: Random seed for reproducibility (ignored if rng is given)
            rng: Generator to draw from
            logger: Logger instance (defaults to the global logger)
        """
        self.error_rate = error_rate
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        # Out-of-range rates are kept as given: above 1.0 behaves like 1.0,
        # below 0.0 like 0.0.
        if not 0.0 <= error_rate <= 1.0:
            (logger or get_logger()).warning(
                f"Delivery rate {error_rate} is outside [0, 1]", "CHANNEL")

    def transmit(
        self,
        frame: Frame,
        source: Machine,
        destination: Machine
    ) -> Optional[Frame]:
        if self.rng.random() < self.error_rate:
            return self._deliver(frame, destination)
        return None

    def reset(self, seed: Optional[int] = None):
        """
        Re-seed the random generator.

        Without a seed the current generator, injected or not, is kept.

        Args:
            seed: New random seed (optional)
        """
        if seed is not None:
            self.rng = np.random.default_rng(seed)

    def __repr__(self) -> str:
        return f"NoisyChannel(error_rate={self.error_rate})"
