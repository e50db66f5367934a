"""
Trendkart - Signal Models

Raw and normalized popularity signals. Both are produced and consumed
within a single trend cycle and never persisted.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RawSignals:
    """Raw measurements for one product in one cycle."""

    search_interest: float = 0.0
    social_mentions: float = 0.0
    video_shares: float = 0.0
    rank_delta: float = 0.0  # marketplace rank change, lower is better
    social_buzz: float = 0.0


@dataclass(frozen=True)
class NormalizedSignals:
    """Signals mapped onto [0, 1]; `marketplace` is the inverted rank delta."""

    search: float = 0.0
    social: float = 0.0
    video: float = 0.0
    marketplace: float = 0.0
    buzz: float = 0.0

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)
