"""Key-value store adapters used to persist alert state."""

from src.storage.base import KeyValueStore
from src.storage.exceptions import (
    StorageError,
    StorageSerializationError,
    StorageWriteError,
)
from src.storage.factory import create_key_value_store
from src.storage.json_file import JsonFileKeyValueStore
from src.storage.memory import InMemoryKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageError",
    "StorageSerializationError",
    "StorageWriteError",
    "create_key_value_store",
]
