"""Convenience factory for wiring the notification stack."""

from __future__ import annotations

from src.core.config import NotificationsConfig
from src.monitor.channels import NotificationChannel, WebhookChannel
from src.monitor.dispatcher import NotificationDispatcher


def create_notifier(config: NotificationsConfig) -> NotificationDispatcher:
    """Build a dispatcher with the channels enabled in *config*.

    With ``log_only`` set, no channels are attached and notifications are
    only written to the decision log.
    """
    channels: list[NotificationChannel] = []

    if not config.log_only and config.webhook.enabled:
        channels.append(WebhookChannel(config.webhook))

    return NotificationDispatcher(channels=channels)
