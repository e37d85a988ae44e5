"""Notification subsystem — sink interface, dispatcher, channels, formatting."""

from src.monitor.channels import NotificationChannel, WebhookChannel
from src.monitor.dispatcher import NotificationDispatcher, NotificationSink
from src.monitor.factory import create_notifier
from src.monitor.formatters import format_alert_event
from src.monitor.types import Notification, Severity

__all__ = [
    "Notification",
    "NotificationChannel",
    "NotificationDispatcher",
    "NotificationSink",
    "Severity",
    "WebhookChannel",
    "create_notifier",
    "format_alert_event",
]
