"""Durable key-value storage backends (localStorage semantics)."""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from codepad.models.storage_entry import StorageEntry
from codepad.services.errors import StorageError, StorageQuotaExceeded

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Synchronous string store keyed by name."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage with an optional byte quota."""

    def __init__(self, quota_bytes: int | None = None):
        self._items: dict[str, str] = {}
        self._quota = quota_bytes

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota is not None:
            others = sum(
                len(k) + len(v) for k, v in self._items.items() if k != key
            )
            needed = others + len(key) + len(value)
            if needed > self._quota:
                raise StorageQuotaExceeded(
                    f"Storage quota exceeded ({needed} > {self._quota} bytes)"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SqlStorage:
    """SQLite-backed storage — one row per key in ``storage_entries``."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def get_item(self, key: str) -> str | None:
        try:
            with self._session_factory() as db:
                entry = db.execute(
                    select(StorageEntry).where(StorageEntry.key == key)
                ).scalar_one_or_none()
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as db:
                entry = db.get(StorageEntry, key)
                if entry:
                    entry.value = value
                else:
                    db.add(StorageEntry(key=key, value=value))
                db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            with self._session_factory() as db:
                entry = db.get(StorageEntry, key)
                if entry:
                    db.delete(entry)
                    db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to remove '{key}': {e}") from e
