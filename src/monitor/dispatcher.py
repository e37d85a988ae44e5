"""Notification sink interface and the central dispatcher."""

from __future__ import annotations

import abc

import structlog

from src.monitor.channels import NotificationChannel
from src.monitor.types import Notification, Severity

# Dedicated structured logger for decision records.
decision_logger = structlog.get_logger("decision_log")

logger = structlog.get_logger(__name__)


class NotificationSink(abc.ABC):
    """Receives the human-readable outcome of every lifecycle transition."""

    @abc.abstractmethod
    async def emit(self, notification: Notification) -> None:
        """Surface a notification. Must not raise on delivery failure."""

    async def close(self) -> None:
        """Release resources. Default is a no-op."""


class NotificationDispatcher(NotificationSink):
    """Routes notifications to delivery channels.

    - Every notification is logged via *decision_logger*.
    - ERROR notifications are also logged at warning level on the module logger.
    - Channel failures are logged and never propagate to the caller.
    """

    def __init__(self, channels: list[NotificationChannel] | None = None) -> None:
        self._channels: list[NotificationChannel] = channels or []

    @property
    def channels(self) -> list[NotificationChannel]:
        return list(self._channels)

    async def emit(self, notification: Notification) -> None:
        self._log_decision(notification)
        if notification.severity == Severity.ERROR:
            logger.warning(
                "transition_rejected",
                title=notification.title,
                message=notification.message,
            )
        await self._dispatch_to_channels(notification)

    def _log_decision(self, notification: Notification) -> None:
        decision_logger.info(
            "notification",
            severity=notification.severity.label,
            title=notification.title,
            message=notification.message,
            source_event_type=notification.source_event_type,
            fields=notification.fields,
        )

    async def _dispatch_to_channels(self, notification: Notification) -> None:
        for ch in self._channels:
            try:
                await ch.send(notification)
            except Exception:
                logger.exception(
                    "channel_dispatch_error",
                    channel=type(ch).__name__,
                    title=notification.title,
                )

    # ── Lifecycle ───────────────────────────────────────────────

    async def close(self) -> None:
        for ch in self._channels:
            try:
                await ch.close()
            except Exception:
                logger.exception("channel_close_error", channel=type(ch).__name__)
