"""Domain types for the alert lifecycle engine — roles, users, alerts."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


def truncate_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision and assume UTC for naive values."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def utc_now() -> datetime:
    """Current UTC time truncated to millisecond precision.

    Persisted timestamps only keep milliseconds, so truncating at creation
    keeps in-memory and stored values identical.
    """
    return truncate_millis(datetime.now(timezone.utc))


def new_alert_id() -> str:
    return str(uuid.uuid4())


class Role(StrEnum):
    """User role, ordered from least to most privileged."""

    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"

    @property
    def rank(self) -> int:
        return _ROLE_ORDER.index(self)

    def at_least(self, other: Role) -> bool:
        """Total-order comparison: True if this role ranks >= *other*."""
        return self.rank >= other.rank


_ROLE_ORDER: tuple[Role, ...] = (Role.USER, Role.ADMIN, Role.SUPER_ADMIN)


class AlertType(StrEnum):
    """Emergency alert type — declaration order is escalation order."""

    HOLD = "hold"
    SECURE = "secure"
    LOCKDOWN = "lockdown"
    EVACUATE = "evacuate"
    SHELTER = "shelter"

    @property
    def severity(self) -> int:
        return ALERT_ORDER.index(self)

    @classmethod
    def parse(cls, value: object) -> AlertType | None:
        """Return the matching AlertType, or None for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return None
        return None


ALERT_ORDER: tuple[AlertType, ...] = (
    AlertType.HOLD,
    AlertType.SECURE,
    AlertType.LOCKDOWN,
    AlertType.EVACUATE,
    AlertType.SHELTER,
)


class User(BaseModel):
    """Identity snapshot supplied by the authentication provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    role: Role = Role.USER
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role.at_least(Role.ADMIN)


class Alert(BaseModel):
    """One emergency alert record, active or historical."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_alert_id)
    type: AlertType
    initiated_by: User
    timestamp: datetime = Field(default_factory=utc_now)
    active: bool = True
    note: str | None = None
    resolved_by: User | None = None
    resolved_at: datetime | None = None

    @field_validator("timestamp", "resolved_at")
    @classmethod
    def _truncate_to_millis(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return truncate_millis(value)

    def resolved(self, by: User, at: datetime | None = None) -> Alert:
        """Return an inactive copy carrying the resolver and resolution time."""
        return self.model_copy(
            update={
                "active": False,
                "resolved_by": by,
                "resolved_at": truncate_millis(at) if at else utc_now(),
            },
        )


# ── Transitions ────────────────────────────────────────────────


class RejectionReason(StrEnum):
    """Why a requested transition was not applied."""

    ALERT_ALREADY_ACTIVE = "ALERT_ALREADY_ACTIVE"
    NO_ACTIVE_ALERT = "NO_ACTIVE_ALERT"
    NOT_AUTHORIZED_TO_RESOLVE = "NOT_AUTHORIZED_TO_RESOLVE"
    ESCALATION_ONLY = "ESCALATION_ONLY"
    TYPE_UNCHANGED = "TYPE_UNCHANGED"
    INVALID_ALERT_TYPE = "INVALID_ALERT_TYPE"
    MISSING_USER = "MISSING_USER"


class PermissionVerdict(BaseModel):
    """Result of a permission check."""

    approved: bool = True
    reason: RejectionReason | None = None
    detail: str = ""


class TransitionStatus(StrEnum):
    """How the controller disposed of a request."""

    APPLIED = "APPLIED"
    REJECTED = "REJECTED"
    IGNORED = "IGNORED"  # silent no-op, nothing emitted


class TransitionOutcome(BaseModel):
    """Result returned from every lifecycle operation."""

    status: TransitionStatus
    reason: RejectionReason | None = None
    detail: str = ""
    alert: Alert | None = None
    previous: Alert | None = None

    @property
    def accepted(self) -> bool:
        return self.status == TransitionStatus.APPLIED


class AlertEventType(StrEnum):
    """Type of lifecycle event handed to the notification formatter."""

    ALERT_INITIATED = "ALERT_INITIATED"
    ALERT_RESOLVED = "ALERT_RESOLVED"
    ALERT_TYPE_CHANGED = "ALERT_TYPE_CHANGED"
    TRANSITION_REJECTED = "TRANSITION_REJECTED"


class AlertEvent(BaseModel):
    """Event emitted by the lifecycle controller."""

    event_type: AlertEventType
    actor: User | None = None
    alert: Alert | None = None
    previous: Alert | None = None
    reason: RejectionReason | None = None
    requested_type: str | None = None
    announcement: str = ""
    detail: str = ""
    timestamp: datetime = Field(default_factory=utc_now)
