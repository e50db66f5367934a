"""
Trendkart - Trend Store

In-memory owner of products, score history, the featured set and alerts.

Readers always see the last fully published snapshot: the product
collection is an immutable tuple that is swapped wholesale, never edited
in place. Admin mutations are serialized by a lock. A trend cycle reads
the collection once and, when it publishes, merges only its own fields
(score, featured_score, updated_at) onto the latest product versions, so
an admin edit made during a cycle is never lost.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from trendkart.core.config import Settings
from trendkart.core.exceptions import NotFoundError, ValidationError
from trendkart.models.alert import Alert
from trendkart.models.product import ALL_REGIONS, NUMERIC_FIELDS, Product
from trendkart.schemas.product import ProductCreate, ProductUpdate
from trendkart.services.alert_emitter import (
    AlertEmitter,
    AlertListener,
    Clock,
    IdFactory,
    new_id,
    utc_now,
)
from trendkart.services.feature_state import (
    ENTRY_THRESHOLD,
    EXIT_THRESHOLD,
    FeatureStateMachine,
)
from trendkart.services.score_history import DEFAULT_WINDOW, HistoryStore

logger = logging.getLogger(__name__)

SORT_DIRECTIONS = ("asc", "desc")

# Fields a trend cycle owns; everything else belongs to admin edits
CYCLE_FIELDS = ("score", "featured_score", "updated_at")

DEMO_PRODUCTS = [
    {
        "name": "Viral LED Water Bottle",
        "region": "Global",
        "price": 1999,
        "inventory": 120,
        "reorder_point": 40,
        "tags": ["#hydration", "#aesthetic"],
    },
    {
        "name": "Self-Stirring Mug",
        "region": "India",
        "price": 1299,
        "inventory": 60,
        "reorder_point": 30,
        "tags": ["#coffee", "#office"],
    },
    {
        "name": "Foldable Keyboard",
        "region": "USA",
        "price": 3499,
        "inventory": 35,
        "reorder_point": 25,
        "tags": ["#productivity", "#mobile"],
    },
]


@dataclass(frozen=True)
class StoreSnapshot:
    """A consistent, published view of the product collection."""

    products: tuple[Product, ...] = ()
    featured_ids: frozenset[str] = field(default_factory=frozenset)
    published_at: Optional[datetime] = None


def _invalid(exc: PydanticValidationError) -> ValidationError:
    return ValidationError(
        "Invalid product fields",
        details={"errors": exc.errors(include_url=False, include_context=False)},
    )


class TrendStore:
    """
    Process-lifetime store shared by the trend cycle and the API.

    Create one per application (or per test); nothing here is global.
    """

    def __init__(
        self,
        history_window: int = DEFAULT_WINDOW,
        entry_threshold: float = ENTRY_THRESHOLD,
        exit_threshold: float = EXIT_THRESHOLD,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        alert_listeners: Optional[list[AlertListener]] = None,
    ):
        self.clock = clock or utc_now
        self.id_factory = id_factory or new_id
        self.history = HistoryStore(history_window)
        self.alerts = AlertEmitter(
            clock=self.clock,
            id_factory=self.id_factory,
            listeners=alert_listeners,
        )
        self.features = FeatureStateMachine(
            self.alerts,
            entry_threshold=entry_threshold,
            exit_threshold=exit_threshold,
        )
        self._snapshot = StoreSnapshot()
        self._lock = threading.RLock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        alert_listeners: Optional[list[AlertListener]] = None,
    ) -> "TrendStore":
        return cls(
            history_window=settings.history_window,
            entry_threshold=settings.feature_entry_threshold,
            exit_threshold=settings.feature_exit_threshold,
            clock=clock,
            id_factory=id_factory,
            alert_listeners=alert_listeners,
        )

    # ==========================================================================
    # Reads
    # ==========================================================================

    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    def list_products(
        self,
        region: Optional[str] = None,
        sort: str = "score",
        direction: str = "desc",
    ) -> list[Product]:
        """
        List products, optionally filtered by region and sorted.

        Args:
            region: Region to keep; None or "All" keeps every product
            sort: Numeric product field to sort by
            direction: "asc" or "desc"

        Returns:
            Products in sorted order; ties keep collection order

        Raises:
            ValidationError: Unknown sort field or direction
        """
        if sort not in NUMERIC_FIELDS:
            raise ValidationError(
                f"Unsupported sort field: {sort}",
                details={"allowed": list(NUMERIC_FIELDS)},
            )
        if direction not in SORT_DIRECTIONS:
            raise ValidationError(
                f"Unsupported sort direction: {direction}",
                details={"allowed": list(SORT_DIRECTIONS)},
            )

        products = self._snapshot.products
        if region and region != ALL_REGIONS:
            products = tuple(p for p in products if p.region == region)

        # sorted() is stable for reverse=True as well
        return sorted(
            products,
            key=lambda p: p.numeric(sort),
            reverse=direction == "desc",
        )

    def list_featured(self) -> list[Product]:
        """Featured products in collection order."""
        snapshot = self._snapshot
        return [p for p in snapshot.products if p.id in snapshot.featured_ids]

    def get_product(self, product_id: str) -> Product:
        for product in self._snapshot.products:
            if product.id == product_id:
                return product
        raise NotFoundError("product", product_id)

    def score_history(self, product_id: str) -> list[float]:
        self.get_product(product_id)
        return self.history.scores(product_id)

    def list_alerts(self, only_active: bool = True) -> list[Alert]:
        return self.alerts.list_alerts(only_active)

    # ==========================================================================
    # Admin mutations
    # ==========================================================================

    def create_product(self, fields: Mapping[str, Any]) -> Product:
        """
        Create a product and put it at the front of the collection.

        Raises:
            ValidationError: If name is missing or a field is invalid
        """
        if not fields.get("name"):
            raise ValidationError("name required", details={"field": "name"})

        try:
            data = ProductCreate.model_validate(dict(fields))
            product = Product(id=self.id_factory(), **data.model_dump())
        except PydanticValidationError as e:
            raise _invalid(e) from e

        with self._lock:
            current = self._snapshot
            self._publish(
                (product,) + current.products,
                current.featured_ids,
            )

        logger.info(f"Created product {product.id} ({product.name})")
        return product

    def update_product(self, product_id: str, fields: Mapping[str, Any]) -> Product:
        """
        Shallow-merge editable fields into a product.

        Raises:
            NotFoundError: Unknown product id
            ValidationError: Unknown or invalid field
        """
        try:
            changes = ProductUpdate.model_validate(dict(fields)).model_dump(
                exclude_unset=True
            )
        except PydanticValidationError as e:
            raise _invalid(e) from e
        changes = {k: v for k, v in changes.items() if v is not None}

        with self._lock:
            current = self._snapshot
            for index, product in enumerate(current.products):
                if product.id == product_id:
                    break
            else:
                raise NotFoundError("product", product_id)

            try:
                updated = Product.model_validate(
                    {**product.model_dump(), **changes, "updated_at": self.clock()}
                )
            except PydanticValidationError as e:
                raise _invalid(e) from e

            products = current.products
            self._publish(
                products[:index] + (updated,) + products[index + 1:],
                current.featured_ids,
            )

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return updated

    def resolve_alert(self, alert_id: str) -> Alert:
        with self._lock:
            return self.alerts.resolve(alert_id)

    # ==========================================================================
    # Cycle publication
    # ==========================================================================

    def publish_cycle(
        self,
        updates: Mapping[str, Mapping[str, Any]],
        featured_ids: frozenset[str],
        alerts: Sequence[tuple[Alert, Product]] = (),
    ) -> StoreSnapshot:
        """
        Publish a cycle's results atomically.

        Alerts raised during the cycle join the log only once the snapshot
        they describe is visible; listeners hear about them after that.

        Args:
            updates: Cycle-owned field values keyed by product id
            featured_ids: Featured set after the cycle
            alerts: Alerts the cycle raised, in emission order, with their product

        Returns:
            The newly published snapshot
        """
        with self._lock:
            products = tuple(
                p.model_copy(update={k: updates[p.id][k] for k in CYCLE_FIELDS})
                if p.id in updates
                else p
                for p in self._snapshot.products
            )
            snapshot = self._publish(products, featured_ids)
            self.alerts.append([alert for alert, _ in alerts])

        for alert, product in alerts:
            self.alerts.notify(alert, product)
        return snapshot

    def _publish(
        self,
        products: tuple[Product, ...],
        featured_ids: frozenset[str],
    ) -> StoreSnapshot:
        self._snapshot = StoreSnapshot(
            products=products,
            featured_ids=frozenset(featured_ids),
            published_at=self.clock(),
        )
        return self._snapshot


def seed_demo_products(store: TrendStore) -> list[Product]:
    """Load the demo catalogue, preserving its listed order."""
    created = [store.create_product(fields) for fields in reversed(DEMO_PRODUCTS)]
    return list(reversed(created))
