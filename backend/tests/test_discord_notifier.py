"""
Trendkart - Discord Notifier Tests

Webhook calls go through httpx.MockTransport; nothing leaves the process.
"""

import asyncio
import json
import threading
import time

import httpx
import pytest

from trendkart.models.alert import Alert, AlertType
from trendkart.models.product import Product
from trendkart.services.discord_notifier import ALERT_STYLES, DiscordNotifier
from trendkart.services.trend_cycle import TrendCycle

WEBHOOK_URL = "https://discord.test/api/webhooks/1/token"


@pytest.fixture
def alert(clock):
    return Alert(
        id="a1",
        type=AlertType.LOW_INVENTORY,
        product_id="p1",
        message="Foldable Keyboard low stock: 10 (≤ 25)",
        created_at=clock(),
    )


@pytest.fixture
def product():
    return Product(id="p1", name="Foldable Keyboard", region="USA", inventory=10)


@pytest.fixture
def loop():
    """Event loop running in a background thread, like the app's loop."""
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    yield loop
    loop.call_soon_threadsafe(loop.stop)
    thread.join(timeout=5)
    loop.close()


def _client(requests, status_code=204, delay=0.0):
    async def handler(request):
        if delay:
            await asyncio.sleep(delay)
        requests.append(request)
        return httpx.Response(status_code)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestDiscordNotifier:
    """Tests for webhook delivery."""

    def test_disabled_without_webhook(self, alert, product):
        notifier = DiscordNotifier(webhook_url=None)

        assert notifier.enabled is False
        assert asyncio.run(notifier.alert(alert, product)) is False

    def test_alert_payload(self, alert, product, clock):
        requests = []
        notifier = DiscordNotifier(WEBHOOK_URL, client=_client(requests))

        assert asyncio.run(notifier.alert(alert, product)) is True

        assert len(requests) == 1
        assert str(requests[0].url) == WEBHOOK_URL
        embed = json.loads(requests[0].content)["embeds"][0]
        title, color = ALERT_STYLES[AlertType.LOW_INVENTORY]
        assert embed["title"] == title
        assert embed["color"] == color
        assert embed["description"] == alert.message
        assert embed["timestamp"] == clock().isoformat()
        assert {f["name"]: f["value"] for f in embed["fields"]} == {
            "Product": "Foldable Keyboard",
            "Region": "USA",
            "Inventory": "10",
        }

    def test_http_error_returns_false(self, alert, product):
        requests = []
        notifier = DiscordNotifier(WEBHOOK_URL, client=_client(requests, status_code=500))

        assert asyncio.run(notifier.alert(alert, product)) is False
        assert len(requests) == 1

    def test_unbound_listener_drops_alert(self, alert, product):
        requests = []
        notifier = DiscordNotifier(WEBHOOK_URL, client=_client(requests))

        notifier(alert, product)

        assert notifier.wait_idle(timeout=1) is True
        assert requests == []


class TestListenerDelivery:
    """Tests for delivery from the trend cycle thread."""

    def test_works_as_alert_listener(self, store, product, loop):
        requests = []
        notifier = DiscordNotifier(WEBHOOK_URL, client=_client(requests))
        notifier.bind(loop)
        store.alerts.add_listener(notifier)

        store.alerts.emit(AlertType.RISING, product, "Foldable Keyboard rising")

        assert notifier.wait_idle(timeout=5) is True
        embed = json.loads(requests[0].content)["embeds"][0]
        assert embed["title"] == ALERT_STYLES[AlertType.RISING][0]

    def test_slow_webhook_does_not_delay_cycle(self, store, source, loop, signals_at):
        requests = []
        notifier = DiscordNotifier(WEBHOOK_URL, client=_client(requests, delay=0.5))
        notifier.bind(loop)
        store.alerts.add_listener(notifier)
        for i in range(4):
            product = store.create_product(
                {"name": f"Gadget {i}", "inventory": 1, "reorder_point": 5}
            )
            source.set(product.id, signals_at(0.5))

        started = time.monotonic()
        report = TrendCycle(store, source).run()
        elapsed = time.monotonic() - started

        assert report.alerts_emitted == 4
        assert elapsed < 0.5
        assert notifier.wait_idle(timeout=10) is True
        assert len(requests) == 4
