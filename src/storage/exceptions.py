"""Exception hierarchy for key-value store adapters."""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for all key-value store errors."""


class StorageWriteError(StorageError):
    """A value could not be written or deleted."""


class StorageSerializationError(StorageError):
    """A value is not plain JSON-compatible data."""
