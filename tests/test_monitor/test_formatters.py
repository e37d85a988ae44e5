"""Tests for lifecycle event formatting — severities, templates, fields."""

from __future__ import annotations

from src.core.types import (
    Alert,
    AlertEvent,
    AlertEventType,
    AlertType,
    RejectionReason,
    Role,
    User,
)
from src.monitor.formatters import format_alert_event
from src.monitor.types import Severity

ANA = User(id="u1", name="Ana", role=Role.USER)
CARA = User(id="a1", name="Cara", role=Role.ADMIN)


def _alert(alert_type: AlertType = AlertType.LOCKDOWN) -> Alert:
    return Alert(type=alert_type, initiated_by=ANA)


def _event(**kw: object) -> AlertEvent:
    defaults: dict[str, object] = {
        "event_type": AlertEventType.ALERT_INITIATED,
        "actor": ANA,
        "alert": _alert(),
    }
    defaults.update(kw)
    return AlertEvent(**defaults)  # type: ignore[arg-type]


class TestLifecycleEvents:
    def test_initiated(self) -> None:
        n = format_alert_event(_event(announcement="Lockdown! Locks, Lights, Out of Sight!"))
        assert n.severity == Severity.WARNING
        assert n.title == "ALERT_INITIATED"
        assert n.message == "LOCKDOWN alert has been initiated by Ana"
        assert n.fields["alert_type"] == "lockdown"
        assert n.fields["actor"] == "Ana"
        assert n.fields["role"] == "user"
        assert n.fields["announcement"] == "Lockdown! Locks, Lights, Out of Sight!"

    def test_resolved(self) -> None:
        alert = _alert(AlertType.SECURE).resolved(by=CARA)
        n = format_alert_event(
            _event(event_type=AlertEventType.ALERT_RESOLVED, actor=CARA, alert=alert),
        )
        assert n.severity == Severity.SUCCESS
        assert n.message == "SECURE alert has been resolved by Cara"

    def test_type_changed(self) -> None:
        old = _alert(AlertType.HOLD)
        new = _alert(AlertType.SHELTER)
        n = format_alert_event(
            _event(
                event_type=AlertEventType.ALERT_TYPE_CHANGED,
                alert=new,
                previous=old,
            ),
        )
        assert n.severity == Severity.WARNING
        assert n.message == "Alert type changed from HOLD to SHELTER by Ana"
        assert n.fields["previous_type"] == "hold"

    def test_no_announcement_field_when_empty(self) -> None:
        n = format_alert_event(_event())
        assert "announcement" not in n.fields

    def test_raw_is_json_dump(self) -> None:
        event = _event()
        n = format_alert_event(event)
        assert n.raw["event_type"] == "ALERT_INITIATED"
        assert n.raw["alert"]["id"] == event.alert.id  # type: ignore[union-attr]


class TestRejections:
    def _reject(self, reason: RejectionReason, **kw: object) -> AlertEvent:
        return _event(event_type=AlertEventType.TRANSITION_REJECTED, reason=reason, **kw)

    def test_already_active(self) -> None:
        n = format_alert_event(self._reject(RejectionReason.ALERT_ALREADY_ACTIVE))
        assert n.severity == Severity.ERROR
        assert n.title == "ALERT_ALREADY_ACTIVE"
        assert n.message == "An alert is already active. Please resolve it first."
        assert n.fields["reason"] == "ALERT_ALREADY_ACTIVE"

    def test_type_unchanged_is_info(self) -> None:
        n = format_alert_event(
            self._reject(RejectionReason.TYPE_UNCHANGED, requested_type="lockdown"),
        )
        assert n.severity == Severity.INFO
        assert n.message == "Alert is already set to LOCKDOWN"

    def test_not_authorized(self) -> None:
        n = format_alert_event(self._reject(RejectionReason.NOT_AUTHORIZED_TO_RESOLVE))
        assert n.severity == Severity.ERROR
        assert n.message == "Ana is not authorized to resolve the LOCKDOWN alert"

    def test_escalation_only(self) -> None:
        n = format_alert_event(
            self._reject(RejectionReason.ESCALATION_ONLY, requested_type="secure"),
        )
        assert n.message == (
            "Ana may only escalate the LOCKDOWN alert; SECURE is not an escalation"
        )

    def test_invalid_type(self) -> None:
        n = format_alert_event(
            self._reject(
                RejectionReason.INVALID_ALERT_TYPE,
                alert=None,
                requested_type="Volcano",
            ),
        )
        assert n.message == "Unknown alert type 'Volcano'"
        assert "alert_id" not in n.fields

    def test_missing_user(self) -> None:
        n = format_alert_event(self._reject(RejectionReason.MISSING_USER, actor=None))
        assert n.severity == Severity.ERROR
        assert "actor" not in n.fields
