"""
Trendkart - Signal Processor Service

Maps raw popularity signals onto the unit interval.

Each raw measurement is min/max normalized against a fixed range and
clamped to [0, 1]. Marketplace rank delta is inverted, since a smaller
rank change means the product is selling better.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from trendkart.core.config import Settings
from trendkart.models.signal import NormalizedSignals, RawSignals


def normalize(
    value: float,
    min_value: float,
    max_value: float,
    invert: bool = False,
) -> float:
    """
    Normalize a raw value into [0, 1].

    A degenerate range (max == min) yields 0 rather than raising.

    Args:
        value: Raw measurement
        min_value: Lower bound of the expected range
        max_value: Upper bound of the expected range
        invert: Return 1 - normalized (lower raw value is better)

    Returns:
        Float in [0, 1]
    """
    if max_value == min_value:
        return 0.0

    n = (value - min_value) / (max_value - min_value)
    if math.isnan(n):
        n = 0.0
    clamped = min(max(n, 0.0), 1.0)
    return 1.0 - clamped if invert else clamped


@dataclass(frozen=True)
class SignalRange:
    """Expected range of one raw signal."""

    min_value: float = 0.0
    max_value: float = 1.0
    invert: bool = False

    def apply(self, value: float) -> float:
        return normalize(value, self.min_value, self.max_value, self.invert)


@dataclass(frozen=True)
class SignalRanges:
    """Normalization ranges for the five raw signals."""

    search_interest: SignalRange = field(default_factory=lambda: SignalRange(0, 100))
    social_mentions: SignalRange = field(default_factory=lambda: SignalRange(0, 8000))
    video_shares: SignalRange = field(default_factory=lambda: SignalRange(0, 800000))
    rank_delta: SignalRange = field(
        default_factory=lambda: SignalRange(0, 10000, invert=True)
    )
    social_buzz: SignalRange = field(default_factory=lambda: SignalRange(0, 1000))

    @classmethod
    def from_settings(cls, settings: Settings) -> "SignalRanges":
        """Build ranges from configured signal maxima."""
        return cls(
            search_interest=SignalRange(0, settings.search_interest_max),
            social_mentions=SignalRange(0, settings.social_mentions_max),
            video_shares=SignalRange(0, settings.video_shares_max),
            rank_delta=SignalRange(0, settings.rank_delta_max, invert=True),
            social_buzz=SignalRange(0, settings.social_buzz_max),
        )


def normalize_signals(
    raw: RawSignals,
    ranges: Optional[SignalRanges] = None,
) -> NormalizedSignals:
    """
    Normalize a full raw signal set.

    Args:
        raw: Raw signals for one product
        ranges: Normalization ranges (defaults to the built-in ranges)

    Returns:
        NormalizedSignals with every component in [0, 1]
    """
    ranges = ranges or SignalRanges()
    return NormalizedSignals(
        search=ranges.search_interest.apply(raw.search_interest),
        social=ranges.social_mentions.apply(raw.social_mentions),
        video=ranges.video_shares.apply(raw.video_shares),
        marketplace=ranges.rank_delta.apply(raw.rank_delta),
        buzz=ranges.social_buzz.apply(raw.social_buzz),
    )
