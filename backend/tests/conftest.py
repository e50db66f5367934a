"""
Trendkart - Test Configuration

Shared fixtures and configuration for pytest.
"""

import itertools
import os
from datetime import datetime, timedelta, timezone

import pytest

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["SEED_DEMO_PRODUCTS"] = "false"
os.environ["ADMIN_API_KEY"] = "test-admin-key"

from trendkart.models.signal import RawSignals
from trendkart.services.signal_sources import StaticSignalSource
from trendkart.services.trend_cycle import TrendCycle
from trendkart.services.trend_store import TrendStore


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 30) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


def uniform(level: float) -> RawSignals:
    """Raw signals whose every normalized component equals `level`."""
    return RawSignals(
        search_interest=level * 100,
        social_mentions=level * 8000,
        video_shares=level * 800000,
        rank_delta=(1 - level) * 10000,
        social_buzz=level * 1000,
    )


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def store(clock, id_factory):
    return TrendStore(clock=clock, id_factory=id_factory)


@pytest.fixture
def source():
    return StaticSignalSource()


@pytest.fixture
def cycle(store, source):
    return TrendCycle(store, source)


@pytest.fixture
def signals_at():
    """Factory for RawSignals that normalize to a uniform level."""
    return uniform
