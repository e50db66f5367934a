"""
Trendkart - Score History

Bounded per-product time series of past trend scores.
"""

import threading
from collections import deque

DEFAULT_WINDOW = 48


class HistoryStore:
    """
    Sliding window of recent trend scores per product.

    Only the trend cycle writes here and cycles never overlap. The lock
    only keeps history reads from the API consistent with a concurrent
    append. Callers must read `previous_score` before recording the
    current cycle's score.
    """

    def __init__(self, window: int = DEFAULT_WINDOW):
        if window < 1:
            raise ValueError("history window must be at least 1")
        self.window = window
        self._scores: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def record(self, product_id: str, score: float) -> None:
        """Append a score, evicting the oldest entries beyond the window."""
        with self._lock:
            series = self._scores.get(product_id)
            if series is None:
                series = deque(maxlen=self.window)
                self._scores[product_id] = series
            series.append(score)

    def previous_score(self, product_id: str, fallback: float) -> float:
        """
        Last recorded score for a product.

        On first observation there is no history yet; `fallback` (the
        current score) is returned so the initial velocity is zero.
        """
        with self._lock:
            series = self._scores.get(product_id)
            if not series:
                return fallback
            return series[-1]

    def scores(self, product_id: str) -> list[float]:
        """Copy of the recorded scores, oldest first."""
        with self._lock:
            return list(self._scores.get(product_id, ()))

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._scores

    def __len__(self) -> int:
        return len(self._scores)
