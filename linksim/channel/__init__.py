"""
Channel package - Frame transport models.

Contains implementations for:
- Abstract channel contract
- Ideal (lossless) channel
- Noisy (random loss) channel
- Gilbert-Elliott burst loss channel
"""

from .base import Channel
from .ideal import IdealChannel
from .noisy import NoisyChannel
from .gilbert_elliot import GilbertElliottChannel, ChannelState

__all__ = [
    'Channel',
    'IdealChannel',
    'NoisyChannel',
    'GilbertElliottChannel',
    'ChannelState'
]
