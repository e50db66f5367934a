"""
Trendkart - Alert Emitter

Append-only alert log, most recent first.

Alerts are never deduplicated: a low-stock product raises a new alert on
every cycle until someone restocks it. Consumers filter or resolve.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol, Sequence

from trendkart.core.exceptions import NotFoundError
from trendkart.models.alert import Alert, AlertType
from trendkart.models.product import Product

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class AlertListener(Protocol):
    """Receives every alert after it is appended to the log."""

    def __call__(self, alert: Alert, product: Product) -> None: ...


class AlertEmitter:
    """
    Owns the global alert log.

    The log is held as a tuple and replaced on every write, so readers
    always see a complete list without taking the lock.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        listeners: Optional[list[AlertListener]] = None,
    ):
        self.clock = clock or utc_now
        self.id_factory = id_factory or new_id
        self.listeners: list[AlertListener] = list(listeners or [])
        self._alerts: tuple[Alert, ...] = ()
        self._lock = threading.Lock()

    def add_listener(self, listener: AlertListener) -> None:
        self.listeners.append(listener)

    def create(self, alert_type: AlertType, product: Product, message: str) -> Alert:
        """Build an unresolved alert without adding it to the log."""
        return Alert(
            id=self.id_factory(),
            type=AlertType(alert_type),
            product_id=product.id,
            message=message,
            created_at=self.clock(),
        )

    def append(self, alerts: Sequence[Alert]) -> None:
        """
        Add alerts to the log in one step.

        `alerts` is in emission order; the newest ends up first in the log.
        """
        if not alerts:
            return
        with self._lock:
            self._alerts = tuple(reversed(alerts)) + self._alerts
        for alert in alerts:
            logger.info(f"Alert [{alert.type.value}] {alert.message}")

    def notify(self, alert: Alert, product: Product) -> None:
        """Pass a logged alert to every listener. Listener errors are logged."""
        for listener in self.listeners:
            try:
                listener(alert, product)
            except Exception as e:
                logger.error(f"Alert listener failed for alert {alert.id}: {e}")

    def emit(self, alert_type: AlertType, product: Product, message: str) -> Alert:
        """
        Create an alert, prepend it to the log and notify listeners.

        Args:
            alert_type: rising, fading or low_inventory
            product: Product the alert refers to
            message: Human-readable description

        Returns:
            The new unresolved Alert
        """
        alert = self.create(alert_type, product, message)
        self.append([alert])
        self.notify(alert, product)
        return alert

    def list_alerts(self, only_active: bool = True) -> list[Alert]:
        """Alerts, most recent first, optionally excluding resolved ones."""
        alerts = self._alerts
        if only_active:
            return [a for a in alerts if not a.resolved]
        return list(alerts)

    def get(self, alert_id: str) -> Alert:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        raise NotFoundError("alert", alert_id)

    def resolve(self, alert_id: str) -> Alert:
        """
        Mark an alert resolved. Resolving twice is a no-op.

        Raises:
            NotFoundError: If no alert has this id
        """
        with self._lock:
            for index, alert in enumerate(self._alerts):
                if alert.id != alert_id:
                    continue
                if alert.resolved:
                    return alert
                resolved = alert.model_copy(update={"resolved": True})
                self._alerts = (
                    self._alerts[:index] + (resolved,) + self._alerts[index + 1:]
                )
                return resolved
        raise NotFoundError("alert", alert_id)

    def __len__(self) -> int:
        return len(self._alerts)
