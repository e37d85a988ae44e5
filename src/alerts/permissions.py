"""Pure permission checks — who may resolve or re-type the current alert.

Each ``check_*`` function returns a PermissionVerdict explaining a refusal;
the ``can_*`` wrappers reduce that to a bool.
"""

from __future__ import annotations

from src.core.types import (
    ALERT_ORDER,
    Alert,
    AlertType,
    PermissionVerdict,
    RejectionReason,
    User,
)


def is_escalation(from_type: AlertType | str | None, to_type: AlertType | str | None) -> bool:
    """True iff *to_type* is strictly more severe than *from_type*.

    Unknown or missing types are never an escalation.
    """
    current = AlertType.parse(from_type)
    requested = AlertType.parse(to_type)
    if current is None or requested is None:
        return False
    return ALERT_ORDER.index(requested) > ALERT_ORDER.index(current)


def check_resolve(
    user: User,
    current: Alert | None,
    *,
    allow_initiator_resolve: bool = False,
) -> PermissionVerdict:
    """Reject unless *user* may resolve the active *current* alert."""
    if current is None or not current.active:
        return PermissionVerdict(
            approved=False,
            reason=RejectionReason.NO_ACTIVE_ALERT,
            detail="There is no active alert to resolve",
        )
    if user.is_admin:
        return PermissionVerdict(approved=True)
    if allow_initiator_resolve and user.id == current.initiated_by.id:
        return PermissionVerdict(approved=True)
    return PermissionVerdict(
        approved=False,
        reason=RejectionReason.NOT_AUTHORIZED_TO_RESOLVE,
        detail=f"Role '{user.role}' cannot resolve a {current.type} alert",
    )


def check_change_type(
    user: User,
    current: Alert | None,
    requested: AlertType | str | None,
) -> PermissionVerdict:
    """Reject unless *user* may switch the active alert to *requested*.

    Admins may move in either direction; regular users may only escalate.
    """
    if current is None or not current.active:
        return PermissionVerdict(
            approved=False,
            reason=RejectionReason.NO_ACTIVE_ALERT,
            detail="There is no active alert to change",
        )
    new_type = AlertType.parse(requested)
    if new_type is None:
        return PermissionVerdict(
            approved=False,
            reason=RejectionReason.INVALID_ALERT_TYPE,
            detail=f"Unknown alert type {requested!r}",
        )
    if new_type == current.type:
        return PermissionVerdict(
            approved=False,
            reason=RejectionReason.TYPE_UNCHANGED,
            detail=f"Alert is already {new_type}",
        )
    if user.is_admin:
        return PermissionVerdict(approved=True)
    if is_escalation(current.type, new_type):
        return PermissionVerdict(approved=True)
    return PermissionVerdict(
        approved=False,
        reason=RejectionReason.ESCALATION_ONLY,
        detail=f"{new_type} is not an escalation from {current.type}",
    )


def can_resolve(
    user: User,
    current: Alert | None,
    *,
    allow_initiator_resolve: bool = False,
) -> bool:
    return check_resolve(
        user, current, allow_initiator_resolve=allow_initiator_resolve,
    ).approved


def can_change_type(
    user: User,
    current: Alert | None,
    requested: AlertType | str | None,
) -> bool:
    return check_change_type(user, current, requested).approved
