"""Pure functions that convert lifecycle events into Notification objects."""

from __future__ import annotations

from src.core.types import AlertEvent, AlertEventType, RejectionReason
from src.monitor.types import Notification, Severity

# ── Severity mappings ───────────────────────────────────────────

_EVENT_SEVERITY: dict[AlertEventType, Severity] = {
    AlertEventType.ALERT_INITIATED: Severity.WARNING,
    AlertEventType.ALERT_RESOLVED: Severity.SUCCESS,
    AlertEventType.ALERT_TYPE_CHANGED: Severity.WARNING,
    AlertEventType.TRANSITION_REJECTED: Severity.ERROR,
}

_REJECTION_SEVERITY: dict[RejectionReason, Severity] = {
    RejectionReason.TYPE_UNCHANGED: Severity.INFO,
}


def _upper(value: object) -> str:
    return str(value).upper() if value is not None else ""


# ── Message templates ───────────────────────────────────────────


def _rejection_message(event: AlertEvent) -> str:
    actor = event.actor.name if event.actor else "Unknown user"
    current = _upper(event.alert.type) if event.alert else ""
    requested = _upper(event.requested_type)

    templates: dict[RejectionReason, str] = {
        RejectionReason.ALERT_ALREADY_ACTIVE: (
            "An alert is already active. Please resolve it first."
        ),
        RejectionReason.TYPE_UNCHANGED: f"Alert is already set to {requested}",
        RejectionReason.NOT_AUTHORIZED_TO_RESOLVE: (
            f"{actor} is not authorized to resolve the {current} alert"
        ),
        RejectionReason.ESCALATION_ONLY: (
            f"{actor} may only escalate the {current} alert;"
            f" {requested} is not an escalation"
        ),
        RejectionReason.INVALID_ALERT_TYPE: (
            f"Unknown alert type '{event.requested_type}'"
        ),
        RejectionReason.MISSING_USER: (
            "A signed-in user is required to change the alert state"
        ),
    }
    if event.reason in templates:
        return templates[event.reason]
    return event.detail or "Request rejected"


def _message(event: AlertEvent) -> str:
    alert = event.alert
    actor = event.actor.name if event.actor else ""

    if event.event_type == AlertEventType.ALERT_INITIATED and alert:
        return f"{_upper(alert.type)} alert has been initiated by {actor}"
    if event.event_type == AlertEventType.ALERT_RESOLVED and alert:
        return f"{_upper(alert.type)} alert has been resolved by {actor}"
    if event.event_type == AlertEventType.ALERT_TYPE_CHANGED and alert:
        old = _upper(event.previous.type) if event.previous else ""
        return f"Alert type changed from {old} to {_upper(alert.type)} by {actor}"
    return _rejection_message(event)


# ── Formatter ───────────────────────────────────────────────────


def format_alert_event(event: AlertEvent) -> Notification:
    """Convert an AlertEvent to a Notification."""
    severity = _EVENT_SEVERITY.get(event.event_type, Severity.INFO)
    if event.reason is not None:
        severity = _REJECTION_SEVERITY.get(event.reason, severity)

    fields: dict[str, str] = {}
    if event.actor is not None:
        fields["actor"] = event.actor.name
        fields["role"] = event.actor.role.value
    if event.alert is not None:
        fields["alert_id"] = event.alert.id
        fields["alert_type"] = event.alert.type.value
    if event.previous is not None:
        fields["previous_type"] = event.previous.type.value
    if event.reason is not None:
        fields["reason"] = event.reason.value

    if event.announcement:
        fields["announcement"] = event.announcement

    title = event.event_type.value
    if event.reason is not None:
        title = event.reason.value

    return Notification(
        severity=severity,
        title=title,
        message=_message(event),
        fields=fields,
        source_event_type=event.event_type.value,
        timestamp=event.timestamp.timestamp(),
        raw=event.model_dump(mode="json"),
    )
