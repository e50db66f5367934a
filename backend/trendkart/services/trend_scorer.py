"""
Trendkart - Trend Scorer Service

Combines normalized signals into a single weighted trend score.

Scoring Components (default weights):
- Search Interest (25%)
- Social Mentions (20%)
- Short-Video Shares (25%)
- Marketplace Rank (25%, inverted rank delta)
- Social Buzz (5%)
"""

from dataclasses import asdict, dataclass, fields
from typing import Mapping, Union

from trendkart.core.config import Settings
from trendkart.core.exceptions import ValidationError
from trendkart.models.signal import NormalizedSignals

SignalsLike = Union[NormalizedSignals, Mapping[str, float], None]


@dataclass(frozen=True)
class SignalWeights:
    """Per-component weights. Not required to sum to 1."""

    search: float = 0.25
    social: float = 0.20
    video: float = 0.25
    marketplace: float = 0.25
    buzz: float = 0.05

    @classmethod
    def from_settings(cls, settings: Settings) -> "SignalWeights":
        return cls(
            search=settings.weight_search,
            social=settings.weight_social,
            video=settings.weight_video,
            marketplace=settings.weight_marketplace,
            buzz=settings.weight_buzz,
        )

    @property
    def total(self) -> float:
        return sum(asdict(self).values())


COMPONENTS = tuple(f.name for f in fields(NormalizedSignals))

# Short keys used by the original scoring formula
SIGNAL_ALIASES = {"g": "search", "t": "social", "tt": "video", "a": "marketplace", "s": "buzz"}
WEIGHT_ALIASES = {"w" + short: name for short, name in SIGNAL_ALIASES.items()}


def _components(
    values: Mapping[str, float],
    aliases: Mapping[str, str],
    kind: str,
) -> dict[str, float]:
    """
    Resolve a mapping keyed by component name or alias.

    Raises:
        ValidationError: Unknown key, or a component given twice
    """
    resolved: dict[str, float] = {}
    unknown = []
    for key, value in values.items():
        name = key if key in COMPONENTS else aliases.get(key)
        if name is None:
            unknown.append(key)
            continue
        if name in resolved:
            raise ValidationError(
                f"Duplicate {kind} component: {name}",
                details={"component": name},
            )
        resolved[name] = value

    if unknown:
        raise ValidationError(
            f"Unknown {kind} keys: {', '.join(sorted(unknown))}",
            details={"unknown": sorted(unknown), "allowed": list(COMPONENTS)},
        )
    return resolved


def _as_signals(signals: SignalsLike) -> NormalizedSignals:
    if isinstance(signals, NormalizedSignals):
        return signals
    return NormalizedSignals(**_components(signals or {}, SIGNAL_ALIASES, "signal"))


def _as_weights(weights: Union[SignalWeights, Mapping[str, float], None]) -> SignalWeights:
    if isinstance(weights, SignalWeights):
        return weights
    return SignalWeights(**_components(weights or {}, WEIGHT_ALIASES, "weight"))


def compute_trend_score(
    signals: SignalsLike,
    weights: Union[SignalWeights, Mapping[str, float], None] = None,
) -> float:
    """
    Calculate the weighted composite trend score.

    Absent signals count as 0 and absent weights take their defaults.
    Mapping keys may be component names (`search`, `social`, ...) or the
    short forms `g/t/tt/a/s` for signals and `wg/wt/wtt/wa/ws` for weights.
    The result is not clamped: inputs are expected to be normalized already.

    Args:
        signals: NormalizedSignals or a mapping of component name to value
        weights: SignalWeights or a mapping of component name to weight

    Returns:
        Weighted sum of the signal components

    Raises:
        ValidationError: Unknown or duplicated mapping key
    """
    s = _as_signals(signals)
    w = _as_weights(weights)
    return (
        w.search * s.search
        + w.social * s.social
        + w.video * s.video
        + w.marketplace * s.marketplace
        + w.buzz * s.buzz
    )
