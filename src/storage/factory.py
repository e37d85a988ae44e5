"""Build the configured key-value store."""

from __future__ import annotations

from src.core.config import StorageConfig
from src.storage.base import KeyValueStore
from src.storage.json_file import JsonFileKeyValueStore
from src.storage.memory import InMemoryKeyValueStore


def create_key_value_store(config: StorageConfig) -> KeyValueStore:
    """Return an in-memory or JSON-file store depending on ``config.backend``."""
    if config.backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(config.path)
