"""Convenience factory for wiring a lifecycle controller from settings."""

from __future__ import annotations

from src.alerts.controller import AlertLifecycleController
from src.alerts.store import AlertStore
from src.core.config import Settings
from src.monitor.dispatcher import NotificationSink
from src.monitor.factory import create_notifier
from src.storage.base import KeyValueStore
from src.storage.factory import create_key_value_store


async def create_alert_engine(
    settings: Settings,
    kv: KeyValueStore | None = None,
    sink: NotificationSink | None = None,
) -> AlertLifecycleController:
    """Build store + notifier + controller and load persisted state.

    *kv* and *sink* override the configured backends (used by tests and
    embedding applications).
    """
    store = AlertStore(kv or create_key_value_store(settings.storage))
    await store.load()
    return AlertLifecycleController(
        store=store,
        sink=sink or create_notifier(settings.notifications),
        policy=settings.policy,
        protocol=settings.protocol,
    )
