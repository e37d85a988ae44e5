"""In-process key-value store."""

from __future__ import annotations

from src.storage.base import JsonValue, KeyValueStore, to_plain


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Values are copied in and out, never shared."""

    def __init__(self, initial: dict[str, JsonValue] | None = None) -> None:
        self._data: dict[str, JsonValue] = {
            k: to_plain(v) for k, v in (initial or {}).items()
        }

    async def get(self, key: str) -> JsonValue | None:
        if key not in self._data:
            return None
        return to_plain(self._data[key])

    async def set(self, key: str, value: JsonValue) -> None:
        self._data[key] = to_plain(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
