"""Core module — config, types, logging."""

from src.core.config import Settings, get_settings, load_settings, reset_settings
from src.core.logging import setup_logging
from src.core.types import (
    ALERT_ORDER,
    Alert,
    AlertEvent,
    AlertEventType,
    AlertType,
    PermissionVerdict,
    RejectionReason,
    Role,
    TransitionOutcome,
    TransitionStatus,
    User,
    utc_now,
)

__all__ = [
    "ALERT_ORDER",
    "Alert",
    "AlertEvent",
    "AlertEventType",
    "AlertType",
    "PermissionVerdict",
    "RejectionReason",
    "Role",
    "Settings",
    "TransitionOutcome",
    "TransitionStatus",
    "User",
    "get_settings",
    "load_settings",
    "reset_settings",
    "setup_logging",
    "utc_now",
]
