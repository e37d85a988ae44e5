"""AlertLifecycleController — the single entry point for alert state changes.

State machine per store: **Idle** (no current alert) or **Active(type)**.

    Idle       initiate(type)        -> Active(type)   warning
    Active(t)  initiate(*)           -> Active(t)      error: already active
    Active(t)  resolve(user)         -> Idle           success   (guarded)
    Active(t)  change_type(n, user)  -> Active(n)      warning   (guarded)
    Active(t)  change_type(t, user)  -> Active(t)      info: already set
    Idle       resolve / change_type -> Idle           silent

Every operation returns a TransitionOutcome. Guard failures are reported
through the outcome and one notification; they never raise. Operations are
serialised by a lock so one transition completes (mutation, persistence,
notification) before the next starts.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import structlog

from src.alerts.permissions import check_change_type, check_resolve
from src.alerts.protocol import get_protocol_message, get_release_message
from src.alerts.store import AlertStore
from src.core.config import PolicyConfig, ProtocolConfig
from src.core.types import (
    Alert,
    AlertEvent,
    AlertEventType,
    AlertType,
    RejectionReason,
    TransitionOutcome,
    TransitionStatus,
    User,
    utc_now,
)
from src.monitor.dispatcher import NotificationDispatcher, NotificationSink
from src.monitor.formatters import format_alert_event

logger = structlog.get_logger(__name__)


class AlertLifecycleController:
    """Validates, applies, persists and announces alert transitions."""

    def __init__(
        self,
        store: AlertStore,
        sink: NotificationSink | None = None,
        policy: PolicyConfig | None = None,
        protocol: ProtocolConfig | None = None,
    ) -> None:
        self._store = store
        self._sink: NotificationSink = sink or NotificationDispatcher()
        self._policy = policy or PolicyConfig()
        self._protocol = protocol or ProtocolConfig()
        self._lock = asyncio.Lock()

    # ── Read accessors ───────────────────────────────────────────

    def current_alert(self) -> Alert | None:
        return self._store.current

    def history(self, newest_first: bool = False) -> tuple[Alert, ...]:
        """Every alert ever created, in insertion order unless reversed."""
        entries = self._store.history
        return tuple(reversed(entries)) if newest_first else entries

    def can_resolve(self, user: User) -> bool:
        return check_resolve(
            user,
            self._store.current,
            allow_initiator_resolve=self._policy.allow_initiator_resolve,
        ).approved

    def can_change_type(self, user: User, new_type: AlertType | str | None) -> bool:
        return check_change_type(user, self._store.current, new_type).approved

    # ── Transitions ──────────────────────────────────────────────

    async def initiate(
        self,
        alert_type: AlertType | str | None,
        user: User | None,
        note: str | None = None,
    ) -> TransitionOutcome:
        """Raise a new alert. Only possible while Idle."""
        async with self._lock:
            current = self._store.current
            if current is not None:
                return await self._reject(
                    RejectionReason.ALERT_ALREADY_ACTIVE,
                    actor=user,
                    current=current,
                    requested=alert_type,
                    detail=f"Alert {current.id} ({current.type}) is still active",
                )

            if not alert_type:
                return TransitionOutcome(status=TransitionStatus.IGNORED)

            parsed = AlertType.parse(alert_type)
            if parsed is None:
                return await self._reject(
                    RejectionReason.INVALID_ALERT_TYPE,
                    actor=user,
                    requested=alert_type,
                    detail=f"Unknown alert type {alert_type!r}",
                )
            if user is None:
                return await self._reject(
                    RejectionReason.MISSING_USER,
                    requested=alert_type,
                    detail="initiate requires a user",
                )

            alert = Alert(type=parsed, initiated_by=user, note=note)

            def apply() -> None:
                self._store.append(alert)
                self._store.set_current(alert)

            await self._commit(apply)
            logger.info(
                "alert_initiated",
                alert_id=alert.id,
                alert_type=alert.type.value,
                user_id=user.id,
            )
            await self._notify(
                AlertEvent(
                    event_type=AlertEventType.ALERT_INITIATED,
                    actor=user,
                    alert=alert,
                    announcement=get_protocol_message(alert.type, self._protocol),
                ),
            )
            return TransitionOutcome(status=TransitionStatus.APPLIED, alert=alert)

    async def resolve(self, user: User | None) -> TransitionOutcome:
        """End the current alert. A no-op without notification while Idle."""
        async with self._lock:
            current = self._store.current
            if current is None:
                return TransitionOutcome(
                    status=TransitionStatus.IGNORED,
                    reason=RejectionReason.NO_ACTIVE_ALERT,
                )
            if user is None:
                return await self._reject(
                    RejectionReason.MISSING_USER,
                    current=current,
                    detail="resolve requires a user",
                )

            verdict = check_resolve(
                user,
                current,
                allow_initiator_resolve=self._policy.allow_initiator_resolve,
            )
            if not verdict.approved:
                return await self._reject(
                    verdict.reason or RejectionReason.NOT_AUTHORIZED_TO_RESOLVE,
                    actor=user,
                    current=current,
                    detail=verdict.detail,
                )

            resolved = current.resolved(by=user)

            def apply() -> None:
                self._store.replace(resolved)
                self._store.set_current(None)

            await self._commit(apply)
            logger.info(
                "alert_resolved",
                alert_id=resolved.id,
                alert_type=resolved.type.value,
                user_id=user.id,
            )
            await self._notify(
                AlertEvent(
                    event_type=AlertEventType.ALERT_RESOLVED,
                    actor=user,
                    alert=resolved,
                    announcement=get_release_message(resolved.type),
                ),
            )
            return TransitionOutcome(status=TransitionStatus.APPLIED, alert=resolved)

    async def change_type(
        self,
        new_type: AlertType | str | None,
        user: User | None,
    ) -> TransitionOutcome:
        """Supersede the current alert with one of *new_type*.

        The old alert is closed with *user* as resolver; the replacement is
        initiated by *user* and noted with the type it escalated from.
        """
        async with self._lock:
            current = self._store.current
            if current is None:
                return TransitionOutcome(
                    status=TransitionStatus.IGNORED,
                    reason=RejectionReason.NO_ACTIVE_ALERT,
                )
            if user is None:
                return await self._reject(
                    RejectionReason.MISSING_USER,
                    current=current,
                    requested=new_type,
                    detail="change_type requires a user",
                )

            parsed = AlertType.parse(new_type)
            verdict = check_change_type(user, current, new_type)
            if parsed is None or not verdict.approved:
                return await self._reject(
                    verdict.reason or RejectionReason.INVALID_ALERT_TYPE,
                    actor=user,
                    current=current,
                    requested=new_type,
                    detail=verdict.detail,
                )

            now = utc_now()
            superseded = current.resolved(by=user, at=now)
            replacement = Alert(
                type=parsed,
                initiated_by=user,
                timestamp=now,
                note=f"Escalated from {current.type}",
            )

            def apply() -> None:
                self._store.replace(superseded)
                self._store.append(replacement)
                self._store.set_current(replacement)

            await self._commit(apply)
            logger.info(
                "alert_type_changed",
                alert_id=replacement.id,
                superseded_id=superseded.id,
                from_type=superseded.type.value,
                to_type=replacement.type.value,
                user_id=user.id,
            )
            await self._notify(
                AlertEvent(
                    event_type=AlertEventType.ALERT_TYPE_CHANGED,
                    actor=user,
                    alert=replacement,
                    previous=superseded,
                    announcement=get_protocol_message(replacement.type, self._protocol),
                ),
            )
            return TransitionOutcome(
                status=TransitionStatus.APPLIED,
                alert=replacement,
                previous=superseded,
            )

    async def close(self) -> None:
        """Release the notification sink."""
        await self._sink.close()

    # ── Internals ────────────────────────────────────────────────

    async def _commit(self, apply: Callable[[], None]) -> None:
        """Mutate the store and persist; roll back if either fails.

        On failure the snapshot is restored in memory and written back on a
        best-effort basis so a partial write cannot outlive the rollback.
        """
        snapshot = self._store.snapshot()
        try:
            apply()
            await self._store.persist()
        except Exception:
            self._store.restore(snapshot)
            logger.exception("alert_commit_failed")
            await self._resync()
            raise

    async def _resync(self) -> None:
        try:
            await self._store.persist()
        except Exception:
            logger.exception("alert_resync_failed")

    async def _reject(
        self,
        reason: RejectionReason,
        *,
        actor: User | None = None,
        current: Alert | None = None,
        requested: AlertType | str | None = None,
        detail: str = "",
    ) -> TransitionOutcome:
        logger.info(
            "alert_transition_rejected",
            reason=reason.value,
            user_id=actor.id if actor else None,
            current_type=current.type.value if current else None,
            requested_type=str(requested) if requested is not None else None,
        )
        await self._notify(
            AlertEvent(
                event_type=AlertEventType.TRANSITION_REJECTED,
                actor=actor,
                alert=current,
                reason=reason,
                requested_type=str(requested) if requested is not None else None,
                detail=detail,
            ),
        )
        return TransitionOutcome(
            status=TransitionStatus.REJECTED,
            reason=reason,
            detail=detail,
            alert=current,
        )

    async def _notify(self, event: AlertEvent) -> None:
        notification = format_alert_event(event)
        try:
            await self._sink.emit(notification)
        except Exception:
            logger.exception(
                "notification_emit_error",
                sink=type(self._sink).__name__,
                title=notification.title,
            )
