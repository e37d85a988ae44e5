"""Notification channels — chat webhook delivery."""

from __future__ import annotations

import abc

import aiohttp
import structlog

from src.core.config import WebhookConfig
from src.monitor.types import Notification, Severity

logger = structlog.get_logger(__name__)

# Embed colours keyed by severity.
_EMBED_COLORS: dict[Severity, int] = {
    Severity.INFO: 0x3498DB,     # blue
    Severity.SUCCESS: 0x2ECC71,  # green
    Severity.WARNING: 0xF39C12,  # orange
    Severity.ERROR: 0xE74C3C,    # red
}


class NotificationChannel(abc.ABC):
    """Base class for notification delivery channels."""

    @abc.abstractmethod
    async def send(self, notification: Notification) -> bool:
        """Send a notification. Returns True on success."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release resources (HTTP sessions, etc.)."""


class WebhookChannel(NotificationChannel):
    """Delivers notifications to a chat webhook with colour-coded embeds."""

    def __init__(self, config: WebhookConfig) -> None:
        self._webhook_url = config.url.get_secret_value()
        self._username = config.username
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    def build_payload(self, notification: Notification) -> dict:
        color = _EMBED_COLORS.get(notification.severity, 0x95A5A6)
        embed: dict = {
            "title": f"[{notification.severity.name}] {notification.message}",
            "color": color,
        }
        announcement = notification.fields.get("announcement")
        if announcement:
            embed["description"] = announcement
        embed_fields = [
            {"name": k, "value": v, "inline": True}
            for k, v in notification.fields.items()
            if k != "announcement"
        ]
        if embed_fields:
            embed["fields"] = embed_fields
        return {"username": self._username, "embeds": [embed]}

    async def send(self, notification: Notification) -> bool:
        if not self._webhook_url:
            return False

        payload = self.build_payload(notification)
        try:
            session = self._get_session()
            async with session.post(self._webhook_url, json=payload) as resp:
                if resp.status in (200, 204):
                    return True
                body = await resp.text()
                logger.warning(
                    "webhook_send_failed",
                    status=resp.status,
                    body=body[:200],
                )
                return False
        except Exception:
            logger.exception("webhook_send_error")
            return False

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
