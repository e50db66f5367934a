"""
Trendkart - Discord Notifier

Forwards trend alerts to a Discord channel via webhook.
"""

import asyncio
import concurrent.futures
import logging
import threading
from typing import Optional

import httpx

from trendkart.models.alert import Alert, AlertType
from trendkart.models.product import Product

logger = logging.getLogger(__name__)

ALERT_STYLES = {
    AlertType.RISING: ("📈 Trend Rising", 0x57F287),  # Green
    AlertType.FADING: ("📉 Trend Fading", 0xFEE75C),  # Yellow
    AlertType.LOW_INVENTORY: ("📦 Low Inventory", 0xED4245),  # Red
}


class DiscordNotifier:
    """
    Send alert notifications to Discord.

    Registered as an alert listener. Listener calls come from the trend
    cycle thread and only schedule the webhook request on the event loop
    given to `bind`; the cycle never waits for Discord.
    """

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.webhook_url = webhook_url
        self.enabled = bool(self.webhook_url)
        self.timeout = timeout
        self._client = client
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._pending: set[concurrent.futures.Future] = set()
        self._pending_lock = threading.Lock()

        if not self.enabled:
            logger.warning("Discord notifications disabled - no webhook URL configured")

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Set the event loop that delivers notifications."""
        self._loop = loop

    async def send(
        self,
        title: str,
        description: str,
        color: int = 0x5865F2,  # Discord blurple
        fields: Optional[list[dict]] = None,
        timestamp: Optional[str] = None,
    ) -> bool:
        """
        Send an embed message to Discord.

        Returns:
            True if sent successfully
        """
        if not self.enabled:
            return False

        embed = {"title": title, "description": description, "color": color}
        if fields:
            embed["fields"] = fields
        if timestamp:
            embed["timestamp"] = timestamp

        payload = {"embeds": [embed]}

        try:
            if self._client is not None:
                response = await self._client.post(
                    self.webhook_url, json=payload, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self.webhook_url, json=payload, timeout=self.timeout
                    )
            response.raise_for_status()
            return True

        except httpx.HTTPError as e:
            logger.error(f"Failed to send Discord notification: {e}")
            return False

    async def alert(self, alert: Alert, product: Product) -> bool:
        """Send a trend or inventory alert."""
        title, color = ALERT_STYLES[alert.type]
        return await self.send(
            title=title,
            description=alert.message,
            color=color,
            fields=[
                {"name": "Product", "value": product.name, "inline": True},
                {"name": "Region", "value": product.region, "inline": True},
                {"name": "Inventory", "value": str(product.inventory), "inline": True},
            ],
            timestamp=alert.created_at.isoformat(),
        )

    def __call__(self, alert: Alert, product: Product) -> None:
        """Queue an alert for delivery without blocking the caller."""
        if not self.enabled:
            return
        if self._loop is None or self._loop.is_closed():
            logger.warning(f"Discord notifier has no event loop; alert {alert.id} not sent")
            return

        future = asyncio.run_coroutine_threadsafe(self.alert(alert, product), self._loop)
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future: concurrent.futures.Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)
        if not future.cancelled() and future.exception() is not None:
            logger.error(f"Discord notification failed: {future.exception()}")

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Block until queued notifications finish. Must not run on the bound loop.

        Returns:
            True if nothing is left pending
        """
        with self._pending_lock:
            pending = list(self._pending)
        _, not_done = concurrent.futures.wait(pending, timeout=timeout)
        return not not_done
