"""
Trendkart - Trend Cycle

Periodic scoring pass over every tracked product:

1. Fetch raw signals from the signal source
2. Normalize and compose the trend score
3. Compute the velocity-boosted featured score
4. Record the score in history
5. Step the featured state machine (may raise rising/fading alerts)
6. Raise a low-inventory alert whenever inventory <= reorder point
7. Publish updated products, the featured set and new alerts at once,
   then hand the alerts to listeners
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from trendkart.core.config import Settings
from trendkart.models.alert import Alert, AlertType
from trendkart.models.product import Product
from trendkart.services.momentum import DEFAULT_ALPHA, featured_score
from trendkart.services.signal_processor import SignalRanges, normalize_signals
from trendkart.services.signal_sources import SignalSource
from trendkart.services.trend_scorer import SignalWeights, compute_trend_score
from trendkart.services.trend_store import TrendStore

logger = logging.getLogger(__name__)

# Decimal places for published scores
SCORE_PRECISION = 3


@dataclass
class CycleReport:
    """Statistics from a trend cycle run."""

    started_at: datetime
    finished_at: Optional[datetime] = None
    processed: int = 0
    skipped: list[str] = field(default_factory=list)
    alerts_emitted: int = 0

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "processed": self.processed,
            "skipped": list(self.skipped),
            "alerts_emitted": self.alerts_emitted,
            "duration_seconds": self.duration_seconds,
        }


class TrendCycle:
    """
    Runs one scoring pass at a time over the store's products.

    `run()` is single-flight: a call made while another cycle is still in
    progress is dropped and returns None. Nothing is queued.
    """

    def __init__(
        self,
        store: TrendStore,
        source: SignalSource,
        weights: Optional[SignalWeights] = None,
        ranges: Optional[SignalRanges] = None,
        alpha: float = DEFAULT_ALPHA,
    ):
        self.store = store
        self.source = source
        self.weights = weights or SignalWeights()
        self.ranges = ranges or SignalRanges()
        self.alpha = alpha
        self.last_report: Optional[CycleReport] = None
        self._in_flight = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: TrendStore,
        source: SignalSource,
    ) -> "TrendCycle":
        weights = SignalWeights.from_settings(settings)
        if abs(weights.total - 1.0) > 1e-9:
            logger.warning(
                f"Trend score weights sum to {weights.total:.3f}; "
                "scores may fall outside [0, 1]"
            )
        return cls(
            store,
            source,
            weights=weights,
            ranges=SignalRanges.from_settings(settings),
            alpha=settings.momentum_alpha,
        )

    @property
    def is_running(self) -> bool:
        return self._in_flight.locked()

    def run(self) -> Optional[CycleReport]:
        """
        Score every product and publish the results.

        Returns:
            CycleReport, or None when another cycle was already running
        """
        if not self._in_flight.acquire(blocking=False):
            logger.warning("Trend cycle already in progress; trigger dropped")
            return None

        try:
            report = self._run()
        finally:
            self._in_flight.release()

        self.last_report = report
        return report

    def _run(self) -> CycleReport:
        report = CycleReport(started_at=self.store.clock())
        updates: dict[str, dict] = {}
        alerts: list[tuple[Alert, Product]] = []

        for product in self.store.snapshot().products:
            try:
                updates[product.id], raised = self._score_product(product)
            except Exception as e:
                logger.error(f"Error scoring product {product.id}: {e}")
                report.skipped.append(product.id)
                continue
            alerts.extend((alert, product) for alert in raised)
            report.processed += 1

        self.store.publish_cycle(updates, self.store.features.featured_ids(), alerts)

        report.alerts_emitted = len(alerts)
        report.finished_at = self.store.clock()
        logger.info(
            f"Trend cycle complete: {report.processed} products scored, "
            f"{len(report.skipped)} skipped, {report.alerts_emitted} alerts"
        )
        return report

    def _score_product(self, product: Product) -> tuple[dict, list[Alert]]:
        """
        Score one product.

        Everything that can fail runs first; history and featured state
        change only after the whole step has succeeded. Alerts are returned
        for publication with the rest of the cycle.
        """
        raw = self.source.fetch(product)
        signals = normalize_signals(raw, self.ranges)

        # Weights are not forced to sum to 1, so the score is left unclamped
        score = compute_trend_score(signals, self.weights)
        previous = self.store.history.previous_score(product.id, fallback=score)
        boosted = featured_score(score, previous, self.alpha)

        transition = self.store.features.check(product, score, previous)
        raised = []
        if transition is not None:
            raised.append(
                self.store.alerts.create(transition.alert_type, product, transition.message)
            )
        if product.is_low_stock:
            raised.append(
                self.store.alerts.create(
                    AlertType.LOW_INVENTORY,
                    product,
                    f"{product.name} low stock: {product.inventory} (≤ {product.reorder_point})",
                )
            )
        fields = {
            "score": round(score, SCORE_PRECISION),
            "featured_score": round(boosted, SCORE_PRECISION),
            "updated_at": self.store.clock(),
        }

        self.store.history.record(product.id, score)
        if transition is not None:
            self.store.features.commit(transition)
        return fields, raised
