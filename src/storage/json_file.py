"""Key-value store persisted as a single JSON document on disk."""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import structlog

from src.storage.base import JsonValue, KeyValueStore, to_plain
from src.storage.exceptions import StorageWriteError

logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Stores every slot in one JSON object at *path*.

    Each write replaces the whole document atomically (temp file +
    ``os.replace``), so a reader sees either the previous or the new
    document, never a partial one. File I/O runs in a worker thread.

    An unreadable or malformed document reads as empty; it is overwritten
    by the next successful write.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # ── Sync helpers (run off the event loop) ───────────────────

    def _read_document(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, ValueError):
            logger.warning("kv_document_unreadable", path=str(self._path))
            return {}
        if not isinstance(doc, dict):
            logger.warning(
                "kv_document_not_object",
                path=str(self._path),
                found=type(doc).__name__,
            )
            return {}
        return doc

    def _write_document(self, doc: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise StorageWriteError(f"Cannot write {self._path}: {exc}") from exc

    def _update(self, key: str, value: JsonValue | None, remove: bool) -> None:
        doc = self._read_document()
        if remove:
            if key not in doc:
                return
            doc.pop(key)
        else:
            doc[key] = value
        self._write_document(doc)

    # ── KeyValueStore ───────────────────────────────────────────

    async def get(self, key: str) -> JsonValue | None:
        async with self._lock:
            doc = await asyncio.to_thread(self._read_document)
        return doc.get(key)

    async def set(self, key: str, value: JsonValue) -> None:
        plain = to_plain(value)
        async with self._lock:
            await asyncio.to_thread(self._update, key, plain, False)

    async def delete(self, key: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._update, key, None, True)
