"""
Trendkart - Signal Sources

Pluggable acquisition of raw signals for the trend cycle.

Real ingestion (search trends, social APIs, marketplace rank feeds) is
out of scope; `RandomSignalSource` simulates it. A source that cannot
deliver signals for a product must fail fast by raising, and the cycle
skips that product.
"""

import random
from typing import Mapping, Optional, Protocol, Sequence, Union

from trendkart.core.config import Settings
from trendkart.core.exceptions import TrendkartError
from trendkart.models.product import Product
from trendkart.models.signal import RawSignals


class SignalUnavailableError(TrendkartError):
    """Raised when a source has no signals for a product."""

    code = "SIGNAL_UNAVAILABLE"


class SignalSource(Protocol):
    """Anything that can produce a fresh RawSignals for a product."""

    def fetch(self, product: Product) -> RawSignals: ...


class RandomSignalSource:
    """
    Simulated ingestion: uniform random integer signals per cycle.

    Each signal is drawn from [0, max) for its configured maximum. Pass a
    seed for reproducible runs.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        search_interest_max: int = 100,
        social_mentions_max: int = 8000,
        video_shares_max: int = 800000,
        rank_delta_max: int = 10000,
        social_buzz_max: int = 1000,
    ):
        self._rng = random.Random(seed)
        self.search_interest_max = int(search_interest_max)
        self.social_mentions_max = int(social_mentions_max)
        self.video_shares_max = int(video_shares_max)
        self.rank_delta_max = int(rank_delta_max)
        self.social_buzz_max = int(social_buzz_max)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RandomSignalSource":
        return cls(
            seed=settings.signal_seed,
            search_interest_max=settings.search_interest_max,
            social_mentions_max=settings.social_mentions_max,
            video_shares_max=settings.video_shares_max,
            rank_delta_max=settings.rank_delta_max,
            social_buzz_max=settings.social_buzz_max,
        )

    def _draw(self, upper: int) -> int:
        return self._rng.randrange(upper) if upper > 0 else 0

    def fetch(self, product: Product) -> RawSignals:
        return RawSignals(
            search_interest=self._draw(self.search_interest_max),
            social_mentions=self._draw(self.social_mentions_max),
            video_shares=self._draw(self.video_shares_max),
            rank_delta=self._draw(self.rank_delta_max),
            social_buzz=self._draw(self.social_buzz_max),
        )


class StaticSignalSource:
    """
    Deterministic signals keyed by product id.

    A sequence value is replayed one entry per fetch and then repeats its
    last entry. Products with no entry get `default`, or raise
    SignalUnavailableError when no default is set.
    """

    def __init__(
        self,
        signals: Optional[Mapping[str, Union[RawSignals, Sequence[RawSignals]]]] = None,
        default: Optional[RawSignals] = None,
    ):
        self._signals: dict[str, list[RawSignals]] = {}
        self._calls: dict[str, int] = {}
        self.default = default
        for product_id, value in (signals or {}).items():
            self.set(product_id, value)

    def set(self, product_id: str, value: Union[RawSignals, Sequence[RawSignals]]) -> None:
        """Replace the signals served for a product and restart its replay."""
        if isinstance(value, RawSignals):
            value = [value]
        self._signals[product_id] = list(value)
        self._calls[product_id] = 0

    def fetch(self, product: Product) -> RawSignals:
        series = self._signals.get(product.id)
        if not series:
            if self.default is None:
                raise SignalUnavailableError(
                    f"No signals configured for product {product.id}",
                    details={"product_id": product.id},
                )
            return self.default

        index = min(self._calls[product.id], len(series) - 1)
        self._calls[product.id] += 1
        return series[index]
