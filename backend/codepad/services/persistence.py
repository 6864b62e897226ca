"""Persistence layer — JSON snapshots of the file store in key-value storage.

Layout (one JSON document per key):

* files key   -> ``[{id, name, content, type}, ...]``
* recent key  -> ``[{id, timestamp, name}, ...]``
* tabs keys   -> ``[id, ...]`` and the active tab index

A failed save is logged and reported to the user once; in-memory state is
*not* rolled back, so memory and storage stay divergent until the next
successful save. A corrupt or unreadable store is replaced by a fresh one.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from codepad.services.errors import StorageError
from codepad.services.file_store import FileRecord
from codepad.services.notifications import Notifier
from codepad.services.recent_files import RecentFileEntry
from codepad.services.tabs import TabState

if TYPE_CHECKING:
    from codepad.utils.storage import KeyValueStorage

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save to local storage. Your work may not be saved."
LOAD_FAILED_MESSAGE = "Saved files could not be read and were reset to a fresh project."


@dataclass
class PersistedState:
    files: list[FileRecord] = field(default_factory=list)
    recent: list[RecentFileEntry] = field(default_factory=list)
    tabs: TabState = field(default_factory=lambda: TabState(open_ids=(), active_index=-1))
    recovered: bool = False  # True if corrupt data was discarded


class PersistenceLayer:
    """Serializes file store state to a :class:`KeyValueStorage`."""

    def __init__(
        self,
        storage: KeyValueStorage,
        notifier: Notifier | None = None,
        files_key: str = "editorFiles",
        recent_key: str = "editorRecentFiles",
        tabs_key: str = "editorOpenTabs",
        active_tab_key: str = "editorActiveTabIndex",
    ):
        self._storage = storage
        self._notifier = notifier or Notifier()
        self._files_key = files_key
        self._recent_key = recent_key
        self._tabs_key = tabs_key
        self._active_tab_key = active_tab_key

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    def save(
        self,
        files: Sequence[FileRecord],
        recent: Sequence[RecentFileEntry],
        tabs: TabState | None = None,
    ) -> bool:
        """Write all keys. Returns False (after notifying) on failure."""
        try:
            self._storage.set_item(
                self._files_key, json.dumps([f.to_dict() for f in files])
            )
            self._storage.set_item(
                self._recent_key, json.dumps([r.to_dict() for r in recent])
            )
            if tabs is not None:
                self._storage.set_item(self._tabs_key, json.dumps(list(tabs.open_ids)))
                self._storage.set_item(self._active_tab_key, str(tabs.active_index))
        except (StorageError, TypeError, ValueError) as e:
            logger.error("Error saving files to storage: %s", e)
            self._notifier.alert(SAVE_FAILED_MESSAGE)
            return False
        return True

    def load(self) -> PersistedState:
        """Read all keys; never raises on missing or corrupt data."""
        try:
            raw_files = self._storage.get_item(self._files_key)
            if raw_files is None:
                logger.info("No saved files found — starting fresh")
                return PersistedState()

            files = [FileRecord.from_dict(d) for d in _json_list(raw_files)]
            _check_unique(files)

            known_ids = {f.id for f in files}
            recent: list[RecentFileEntry] = []
            raw_recent = self._storage.get_item(self._recent_key)
            if raw_recent is not None:
                recent = [
                    entry
                    for entry in (RecentFileEntry.from_dict(d) for d in _json_list(raw_recent))
                    if entry.id in known_ids
                ]

            tabs = self._load_tabs()
        except (StorageError, KeyError, TypeError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Error loading files from storage, resetting: %s", e)
            self._notifier.alert(LOAD_FAILED_MESSAGE, level="warning")
            return PersistedState(recovered=True)

        logger.debug("Loaded %d files, %d recent entries", len(files), len(recent))
        return PersistedState(files=files, recent=recent, tabs=tabs)

    def _load_tabs(self) -> TabState:
        raw_tabs = self._storage.get_item(self._tabs_key)
        if raw_tabs is None:
            return TabState(open_ids=(), active_index=-1)
        open_ids = tuple(str(i) for i in _json_list(raw_tabs))
        raw_active = self._storage.get_item(self._active_tab_key)
        return TabState(open_ids=open_ids, active_index=_parse_index(raw_active))

    def clear(self) -> None:
        for key in (self._files_key, self._recent_key, self._tabs_key, self._active_tab_key):
            self._storage.remove_item(key)


def _json_list(raw: str) -> list:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    return data


def _check_unique(files: list[FileRecord]) -> None:
    names = [f.name for f in files]
    if len(names) != len(set(names)):
        raise ValueError("Duplicate file names in saved state")
    ids = [f.id for f in files]
    if len(ids) != len(set(ids)):
        raise ValueError("Duplicate file ids in saved state")


def _parse_index(raw: str | None) -> int:
    """A bad active tab index only loses the active tab, not the project."""
    if raw is None:
        return -1
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid active tab index: %r", raw)
        return -1
