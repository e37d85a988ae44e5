"""AlertStore — owns the current alert and the alert history."""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from src.core.types import Alert
from src.storage.base import KeyValueStore

logger = structlog.get_logger(__name__)

CURRENT_ALERT_KEY = "currentAlert"
ALERT_HISTORY_KEY = "alertHistory"

StoreSnapshot = tuple[Alert | None, tuple[Alert, ...]]


class AlertStore:
    """In-memory alert state mirrored to a key-value store.

    History is kept in insertion order. It only grows by ``append`` and only
    changes by ``replace``, which swaps an entry for its resolved copy by id.
    The lifecycle controller is the only intended mutator.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._current: Alert | None = None
        self._history: list[Alert] = []

    # ── Properties ────────────────────────────────────────────────

    @property
    def current(self) -> Alert | None:
        return self._current

    @property
    def history(self) -> tuple[Alert, ...]:
        return tuple(self._history)

    def get(self, alert_id: str) -> Alert | None:
        for entry in self._history:
            if entry.id == alert_id:
                return entry
        return None

    # ── Loading ──────────────────────────────────────────────────

    async def load(self) -> StoreSnapshot:
        """Rebuild state from the key-value store.

        Missing or malformed data yields empty state rather than an error.
        The current alert is the single active history entry; the stored
        current slot is only cross-checked against it.
        """
        raw_history = await self._kv.get(ALERT_HISTORY_KEY)
        raw_current = await self._kv.get(CURRENT_ALERT_KEY)

        history = self._parse_history(raw_history)
        current = self._parse_current(raw_current, history)

        self._history = history
        self._current = current
        logger.info(
            "alert_store_loaded",
            history_len=len(history),
            current_id=current.id if current else None,
        )
        return self.snapshot()

    @staticmethod
    def _parse_history(raw: object) -> list[Alert]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("alert_store_load_malformed", slot=ALERT_HISTORY_KEY)
            return []
        try:
            history = [Alert.model_validate(item) for item in raw]
        except ValidationError as exc:
            logger.warning(
                "alert_store_load_malformed",
                slot=ALERT_HISTORY_KEY,
                errors=exc.error_count(),
            )
            return []

        ids = [entry.id for entry in history]
        if len(set(ids)) != len(ids):
            logger.warning("alert_store_duplicate_id", slot=ALERT_HISTORY_KEY)
            return []
        if sum(1 for entry in history if entry.active) > 1:
            logger.warning("alert_store_multiple_active", slot=ALERT_HISTORY_KEY)
            return []
        return history

    @staticmethod
    def _parse_current(raw: object, history: list[Alert]) -> Alert | None:
        # History is written first, so its active entry wins over a stale slot.
        active = next((a for a in history if a.active), None)

        candidate: Alert | None = None
        if raw is not None:
            try:
                candidate = Alert.model_validate(raw)
            except ValidationError:
                logger.warning("alert_store_load_malformed", slot=CURRENT_ALERT_KEY)

        candidate_id = candidate.id if candidate else None
        active_id = active.id if active else None
        if candidate_id != active_id:
            logger.warning(
                "alert_store_current_inconsistent",
                stored_id=candidate_id,
                history_active_id=active_id,
            )
        return active

    # ── Mutation ─────────────────────────────────────────────────

    def set_current(self, alert: Alert | None) -> None:
        if alert is not None and not alert.active:
            raise ValueError(f"Current alert {alert.id} must be active")
        self._current = alert

    def append(self, entry: Alert) -> None:
        """Add a brand-new entry to the end of the history."""
        if self.get(entry.id) is not None:
            raise ValueError(f"Alert {entry.id} is already in the history")
        self._history.append(entry)

    def replace(self, entry: Alert) -> None:
        """Swap the history entry with the same id for *entry*.

        An inactive entry is final and can never be replaced again.
        """
        for i, existing in enumerate(self._history):
            if existing.id != entry.id:
                continue
            if not existing.active:
                raise ValueError(f"Alert {entry.id} is already resolved")
            self._history[i] = entry
            return
        raise KeyError(entry.id)

    def snapshot(self) -> StoreSnapshot:
        return self._current, tuple(self._history)

    def restore(self, snapshot: StoreSnapshot) -> None:
        """Reset in-memory state to an earlier ``snapshot()``."""
        current, history = snapshot
        self._current = current
        self._history = list(history)

    # ── Persistence ──────────────────────────────────────────────

    async def persist(self) -> None:
        """Write the current-alert slot, then history.

        ``load`` trusts history over the current slot, so the history write
        is the commit point: a failure before it leaves the stored state
        reading as it did before.

        Raises:
            StorageError: If the key-value store rejects a write.
        """
        if self._current is None:
            await self._kv.delete(CURRENT_ALERT_KEY)
        else:
            await self._kv.set(
                CURRENT_ALERT_KEY, self._current.model_dump(mode="json"),
            )
        await self._kv.set(
            ALERT_HISTORY_KEY,
            [a.model_dump(mode="json") for a in self._history],
        )
