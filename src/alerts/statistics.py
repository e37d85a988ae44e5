"""Summary statistics over the alert history."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, Field

from src.core.types import Alert, AlertType


class AlertStatistics(BaseModel):
    """Aggregate view of an alert history."""

    total: int = 0
    active: int = 0
    by_type: dict[AlertType, int] = Field(default_factory=dict)
    by_initiator: dict[str, int] = Field(default_factory=dict)
    most_common_type: AlertType | None = None
    most_active_initiator: str | None = None
    resolved: int = 0
    average_resolution_minutes: float | None = None


def resolution_minutes(alert: Alert) -> float | None:
    """Minutes from creation to resolution, or None if still open."""
    if alert.resolved_at is None:
        return None
    return (alert.resolved_at - alert.timestamp).total_seconds() / 60.0


def _top(counts: Counter) -> object | None:
    # Ties go to whichever key was counted first.
    if not counts:
        return None
    best = max(counts.values())
    return next(k for k, v in counts.items() if v == best)


def summarize(history: Iterable[Alert]) -> AlertStatistics:
    """Count alerts by type and initiator and average their resolution time."""
    entries = list(history)
    by_type: Counter[AlertType] = Counter(a.type for a in entries)
    by_initiator: Counter[str] = Counter(a.initiated_by.name for a in entries)
    durations = [
        m for m in (resolution_minutes(a) for a in entries) if m is not None
    ]

    return AlertStatistics(
        total=len(entries),
        active=sum(1 for a in entries if a.active),
        by_type=dict(by_type),
        by_initiator=dict(by_initiator),
        most_common_type=_top(by_type),
        most_active_initiator=_top(by_initiator),
        resolved=len(durations),
        average_resolution_minutes=(
            round(sum(durations) / len(durations), 1) if durations else None
        ),
    )
