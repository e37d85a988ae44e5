"""Alert lifecycle module — permissions, store, controller, protocol, statistics."""

from src.alerts.controller import AlertLifecycleController
from src.alerts.exceptions import (
    AlertError,
    GuardRejectedError,
    InvalidInputError,
    raise_for_rejection,
)
from src.alerts.factory import create_alert_engine
from src.alerts.permissions import (
    can_change_type,
    can_resolve,
    check_change_type,
    check_resolve,
    is_escalation,
)
from src.alerts.protocol import (
    PROTOCOL_MESSAGES,
    ProtocolMessage,
    get_protocol_message,
    get_release_message,
)
from src.alerts.statistics import AlertStatistics, resolution_minutes, summarize
from src.alerts.store import ALERT_HISTORY_KEY, CURRENT_ALERT_KEY, AlertStore

__all__ = [
    "ALERT_HISTORY_KEY",
    "CURRENT_ALERT_KEY",
    "PROTOCOL_MESSAGES",
    "AlertError",
    "AlertLifecycleController",
    "AlertStatistics",
    "AlertStore",
    "GuardRejectedError",
    "InvalidInputError",
    "ProtocolMessage",
    "can_change_type",
    "can_resolve",
    "check_change_type",
    "check_resolve",
    "create_alert_engine",
    "get_protocol_message",
    "get_release_message",
    "is_escalation",
    "raise_for_rejection",
    "resolution_minutes",
    "summarize",
]
