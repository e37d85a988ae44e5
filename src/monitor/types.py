"""Domain types for the notification subsystem."""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field


class Severity(IntEnum):
    """Notification severity — ordered so comparisons work naturally."""

    INFO = 0
    SUCCESS = 1
    WARNING = 2
    ERROR = 3

    @property
    def label(self) -> str:
        """Lower-case name used by toast-style front ends."""
        return self.name.lower()


class Notification(BaseModel):
    """Human-readable message ready for delivery to a sink."""

    severity: Severity
    title: str
    message: str = ""
    fields: dict[str, str] = Field(default_factory=dict)
    source_event_type: str = ""
    timestamp: float = Field(default_factory=time.time)
    raw: dict[str, Any] = Field(default_factory=dict)
