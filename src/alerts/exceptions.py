"""Alert lifecycle exceptions."""

from __future__ import annotations

from src.core.types import RejectionReason, TransitionOutcome, TransitionStatus


class AlertError(Exception):
    """Base exception for alert lifecycle errors."""


class GuardRejectedError(AlertError):
    """A permission or state-machine guard refused the transition."""

    def __init__(self, reason: RejectionReason, detail: str = "") -> None:
        super().__init__(detail or reason.value)
        self.reason = reason
        self.detail = detail


class InvalidInputError(GuardRejectedError):
    """The request carried an unknown alert type or no user."""


_INPUT_REASONS = frozenset(
    {RejectionReason.INVALID_ALERT_TYPE, RejectionReason.MISSING_USER},
)


def raise_for_rejection(outcome: TransitionOutcome) -> TransitionOutcome:
    """Raise the matching exception if *outcome* was rejected.

    Applied and silently ignored outcomes are returned unchanged.
    """
    if outcome.status != TransitionStatus.REJECTED or outcome.reason is None:
        return outcome
    if outcome.reason in _INPUT_REASONS:
        raise InvalidInputError(outcome.reason, outcome.detail)
    raise GuardRejectedError(outcome.reason, outcome.detail)
