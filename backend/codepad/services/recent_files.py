"""Most-recently-used file list with weak id references."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from codepad.services.file_store import FileRecord

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class RecentFileEntry:
    id: str
    timestamp: int  # epoch millis
    cached_name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "timestamp": self.timestamp, "name": self.cached_name}

    @classmethod
    def from_dict(cls, data: dict) -> "RecentFileEntry":
        return cls(
            id=str(data["id"]),
            timestamp=int(data.get("timestamp", 0)),
            cached_name=str(data.get("name", "")),
        )


class RecentFilesTracker:
    """Bounded MRU list.

    Entries name files by id only. A deleted file keeps its entry until the
    next ``PersistenceLayer.load()`` filters it out, and a rename is only
    reflected once the file is opened again.
    """

    def __init__(self, limit: int = DEFAULT_LIMIT, clock: Callable[[], int] = now_millis):
        self._limit = limit
        self._clock = clock
        self._entries: list[RecentFileEntry] = []

    @property
    def limit(self) -> int:
        return self._limit

    def add(self, file_id: str, name: str) -> RecentFileEntry:
        entry = RecentFileEntry(id=file_id, timestamp=self._clock(), cached_name=name)
        self._entries = [e for e in self._entries if e.id != file_id]
        self._entries.insert(0, entry)
        del self._entries[self._limit:]
        return entry

    def get_recent(self) -> list[RecentFileEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries = []
        logger.info("Recent files cleared")

    def replace(self, entries: list[RecentFileEntry]) -> None:
        """Install entries restored from storage (already filtered)."""
        self._entries = list(entries[: self._limit])

    def resolve(
        self, lookup: Callable[[str], FileRecord | None]
    ) -> list[tuple[RecentFileEntry, FileRecord | None]]:
        """Pair each entry with its live record, if the file still exists."""
        return [(entry, lookup(entry.id)) for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)


def display_name(entry: RecentFileEntry, record: FileRecord | None) -> str:
    """Prefer the live name; fall back to the name cached when opened."""
    return record.name if record is not None else entry.cached_name


def time_ago(timestamp: int, now: int | None = None) -> str:
    """Short relative age for the recent-files list."""
    now = now_millis() if now is None else now
    diff = now - timestamp
    minutes = diff // (1000 * 60)
    hours = diff // (1000 * 60 * 60)
    days = diff // (1000 * 60 * 60 * 24)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return datetime.fromtimestamp(timestamp / 1000).strftime("%Y-%m-%d")
