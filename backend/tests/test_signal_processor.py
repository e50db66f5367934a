"""
Trendkart - Signal Normalization Tests
"""

import math

import pytest

from trendkart.core.config import Settings
from trendkart.models.signal import RawSignals
from trendkart.services.signal_processor import (
    SignalRange,
    SignalRanges,
    normalize,
    normalize_signals,
)


class TestNormalize:
    """Tests for min/max normalization."""

    def test_midpoint(self):
        assert normalize(50, 0, 100) == pytest.approx(0.5)

    def test_clamps_below_range(self):
        assert normalize(-20, 0, 100) == 0.0

    def test_clamps_above_range(self):
        assert normalize(250, 0, 100) == 1.0

    def test_invert(self):
        assert normalize(2500, 0, 10000, invert=True) == pytest.approx(0.75)

    def test_invert_clamps_before_inverting(self):
        assert normalize(20000, 0, 10000, invert=True) == 0.0
        assert normalize(-5, 0, 10000, invert=True) == 1.0

    @pytest.mark.parametrize("value", [-100, 0, 5, 7.5, 1e9])
    def test_degenerate_range_returns_zero(self, value):
        """max == min is a defined zero, never a division error."""
        assert normalize(value, 5, 5) == 0.0
        assert normalize(value, 5, 5, invert=True) == 0.0

    def test_non_decreasing(self):
        values = [-10, 0, 1, 10, 33.3, 50, 99, 100, 150]
        results = [normalize(v, 0, 100) for v in values]
        assert results == sorted(results)

    def test_non_increasing_when_inverted(self):
        values = [-10, 0, 1, 10, 33.3, 50, 99, 100, 150]
        results = [normalize(v, 0, 100, invert=True) for v in values]
        assert results == sorted(results, reverse=True)

    @pytest.mark.parametrize("value", [-1e12, -1, 0, 0.3, 1, 1e12, float("inf"), float("nan")])
    def test_always_finite_unit_interval(self, value):
        result = normalize(value, 0, 1)
        assert math.isfinite(result)
        assert 0.0 <= result <= 1.0


class TestNormalizeSignals:
    """Tests for normalizing a full raw signal set."""

    def test_default_ranges(self):
        raw = RawSignals(
            search_interest=50,
            social_mentions=2000,
            video_shares=800000,
            rank_delta=2500,
            social_buzz=0,
        )
        signals = normalize_signals(raw)

        assert signals.search == pytest.approx(0.5)
        assert signals.social == pytest.approx(0.25)
        assert signals.video == pytest.approx(1.0)
        assert signals.marketplace == pytest.approx(0.75)
        assert signals.buzz == 0.0

    def test_lower_rank_delta_scores_higher(self):
        low = normalize_signals(RawSignals(rank_delta=100))
        high = normalize_signals(RawSignals(rank_delta=9000))
        assert low.marketplace > high.marketplace

    def test_ranges_from_settings(self):
        settings = Settings(search_interest_max=200, rank_delta_max=500)
        ranges = SignalRanges.from_settings(settings)

        assert ranges.search_interest == SignalRange(0, 200)
        assert ranges.rank_delta.invert is True
        assert normalize_signals(RawSignals(search_interest=100), ranges).search == pytest.approx(0.5)
