"""
Trendkart - Feature State Machine

Per-product membership in the "featured" set, with hysteresis.

A product enters the featured set when its score rises above the entry
threshold while still climbing, and leaves only when the score drops
below the (lower) exit threshold. Scores between the two thresholds
never change membership, which keeps products hovering around a single
midpoint from flapping in and out.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from trendkart.models.alert import Alert, AlertType
from trendkart.models.product import Product
from trendkart.services.alert_emitter import AlertEmitter

logger = logging.getLogger(__name__)

ENTRY_THRESHOLD = 0.65
EXIT_THRESHOLD = 0.45


class FeatureState(str, enum.Enum):
    """Featured set membership."""

    NOT_FEATURED = "not_featured"
    FEATURED = "featured"


@dataclass(frozen=True)
class FeatureTransition:
    """A pending change of featured membership and the alert it raises."""

    product_id: str
    state: FeatureState
    alert_type: AlertType
    message: str


class FeatureStateMachine:
    """
    Owns the featured set.

    Membership changes only through `commit` (or `evaluate`), once per
    product per cycle.
    """

    def __init__(
        self,
        emitter: AlertEmitter,
        entry_threshold: float = ENTRY_THRESHOLD,
        exit_threshold: float = EXIT_THRESHOLD,
    ):
        if entry_threshold <= exit_threshold:
            raise ValueError("entry threshold must be greater than exit threshold")
        self.emitter = emitter
        self.entry_threshold = entry_threshold
        self.exit_threshold = exit_threshold
        self._featured: set[str] = set()

    def state_of(self, product_id: str) -> FeatureState:
        if product_id in self._featured:
            return FeatureState.FEATURED
        return FeatureState.NOT_FEATURED

    def featured_ids(self) -> frozenset[str]:
        return frozenset(self._featured)

    def check(
        self, product: Product, score: float, previous: float
    ) -> Optional[FeatureTransition]:
        """
        Work out the transition for one step without applying it.

        Args:
            product: Product being scored (pre-cycle snapshot)
            score: Trend score for this cycle
            previous: Trend score from the previous cycle

        Returns:
            FeatureTransition when membership changes, else None
        """
        delta = score - previous

        if product.id not in self._featured:
            if score > self.entry_threshold and delta > 0:
                return FeatureTransition(
                    product_id=product.id,
                    state=FeatureState.FEATURED,
                    alert_type=AlertType.RISING,
                    message=f"{product.name} rising: score {score:.2f} (Δ {delta:.2f})",
                )
            return None

        if score < self.exit_threshold:
            return FeatureTransition(
                product_id=product.id,
                state=FeatureState.NOT_FEATURED,
                alert_type=AlertType.FADING,
                message=f"{product.name} fading: score {score:.2f}",
            )
        return None

    def commit(self, transition: FeatureTransition) -> None:
        if transition.state == FeatureState.FEATURED:
            self._featured.add(transition.product_id)
        else:
            self._featured.discard(transition.product_id)
        logger.debug(f"Product {transition.product_id} is now {transition.state.value}")

    def evaluate(self, product: Product, score: float, previous: float) -> Optional[Alert]:
        """
        Check and apply one step, emitting the alert immediately.

        Returns:
            The rising/fading alert emitted on a transition, else None
        """
        transition = self.check(product, score, previous)
        if transition is None:
            return None
        self.commit(transition)
        return self.emitter.emit(transition.alert_type, product, transition.message)
