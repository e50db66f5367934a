"""Trendkart Services - Trend scoring engine and state."""

from trendkart.services.alert_emitter import AlertEmitter
from trendkart.services.cycle_scheduler import CycleScheduler
from trendkart.services.feature_state import FeatureState, FeatureStateMachine, FeatureTransition
from trendkart.services.momentum import featured_score
from trendkart.services.score_history import HistoryStore
from trendkart.services.signal_processor import SignalRange, SignalRanges, normalize, normalize_signals
from trendkart.services.signal_sources import RandomSignalSource, SignalSource, StaticSignalSource
from trendkart.services.trend_cycle import CycleReport, TrendCycle
from trendkart.services.trend_scorer import SignalWeights, compute_trend_score
from trendkart.services.trend_store import StoreSnapshot, TrendStore, seed_demo_products

__all__ = [
    "normalize",
    "normalize_signals",
    "SignalRange",
    "SignalRanges",
    "compute_trend_score",
    "SignalWeights",
    "featured_score",
    "HistoryStore",
    "FeatureState",
    "FeatureStateMachine",
    "FeatureTransition",
    "AlertEmitter",
    "TrendStore",
    "StoreSnapshot",
    "seed_demo_products",
    "SignalSource",
    "RandomSignalSource",
    "StaticSignalSource",
    "TrendCycle",
    "CycleReport",
    "CycleScheduler",
]
