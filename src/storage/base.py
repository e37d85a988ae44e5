"""Abstract key-value store — the persistence seam of the alert engine."""

from __future__ import annotations

import abc
import json
from typing import Any

from src.storage.exceptions import StorageSerializationError

JsonValue = Any


def to_plain(value: JsonValue) -> JsonValue:
    """Deep-copy *value* through JSON so only plain structured data is stored.

    Raises:
        StorageSerializationError: If *value* is not JSON-serialisable.
    """
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError) as exc:
        raise StorageSerializationError(str(exc)) from exc


class KeyValueStore(abc.ABC):
    """Named-slot store holding plain JSON-compatible values.

    Implementations may do I/O; every method is a coroutine so the caller
    can await completion before reporting success.
    """

    @abc.abstractmethod
    async def get(self, key: str) -> JsonValue | None:
        """Return the value stored under *key*, or None if absent."""

    @abc.abstractmethod
    async def set(self, key: str, value: JsonValue) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abc.abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*. Deleting a missing key is not an error."""

    async def close(self) -> None:
        """Release resources. Default is a no-op."""
