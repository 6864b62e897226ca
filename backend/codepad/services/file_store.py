"""File store — the flat collection of virtual files and the current-file pointer.

All mutations go through :class:`FileStore`. Records are immutable; every
change replaces the record in the sequence, so snapshots handed to the
editor, tab bar or preview can never drift from the store's invariants:

* no two records share a name (exact, case-sensitive);
* ``current_index`` is -1 or a valid index into the sequence.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable

from codepad.services import naming
from codepad.services.errors import DuplicateNameError, NotFoundError
from codepad.services.file_kinds import FileKind, kind_for_name, parse_kind
from codepad.services.recent_files import (
    RecentFileEntry,
    RecentFilesTracker,
    now_millis,
)
from codepad.services.tabs import OpenTabs, TabState

if TYPE_CHECKING:
    from codepad.services.persistence import PersistenceLayer

logger = logging.getLogger(__name__)

NO_SELECTION = -1
PLACEHOLDER_CONTENT = "# This file keeps the folder visible\n"

STARTER_DOCUMENT = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Dashboard</title>
    <link rel="stylesheet" href="style.css">
</head>
<body>
    <div class="dashboard">
        <header class="header">
            <h1>Analytics Dashboard</h1>
            <div class="user-info">
                <span>Welcome, Admin</span>
                <div class="user-icon"></div>
            </div>
        </header>

        <div class="card"></div>

        <div class="main-container">
            <aside class="sidebar">
                <nav>
                    <ul>
                        <li class="active">Dashboard</li>
                        <li>Analytics</li>
                        <li>Reports</li>
                        <li>Settings</li>
                    </ul>
                </nav>
            </aside>

            <main class="content">
                <!-- Main content will go here -->
            </main>
        </div>
    </div>
</body>
</html>"""

_ID_RE = re.compile(r"^file_\d+_(\d+)$")


@dataclass(frozen=True)
class FileRecord:
    id: str
    name: str
    content: str
    kind: FileKind = FileKind.PLAIN_TEXT

    @property
    def basename(self) -> str:
        return naming.basename(self.name)

    @property
    def folder(self) -> str | None:
        return naming.folder_of(self.name)

    @property
    def is_placeholder(self) -> bool:
        return naming.is_placeholder(self.name)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "type": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FileRecord":
        name = str(data["name"])
        return cls(
            id=str(data["id"]),
            name=name,
            content=str(data.get("content", "")),
            kind=parse_kind(data.get("type"), name),
        )


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only view for the tab bar and preview."""

    files: tuple[FileRecord, ...]
    current_index: int

    @property
    def current(self) -> FileRecord | None:
        if 0 <= self.current_index < len(self.files):
            return self.files[self.current_index]
        return None


class FileStore:
    """Owns every :class:`FileRecord`, the current index, recents and tabs."""

    def __init__(
        self,
        persistence: PersistenceLayer | None = None,
        recent: RecentFilesTracker | None = None,
        clock: Callable[[], int] = now_millis,
        default_file_name: str = "index.html",
    ):
        self._persistence = persistence
        self._recent = recent or RecentFilesTracker(clock=clock)
        self._tabs = OpenTabs()
        self._clock = clock
        self._default_file_name = default_file_name
        self._files: list[FileRecord] = []
        self._current_index = NO_SELECTION
        self._counter = 0

    # --- Loading & persistence ----------------------------------------------

    def load(self) -> None:
        """Populate from storage, seeding a starter document if nothing usable."""
        self._files = []
        self._current_index = NO_SELECTION
        self._tabs.close_all()

        if self._persistence is None:
            self.seed()
            return

        persisted = self._persistence.load()
        self._files = list(persisted.files)
        self._counter = self._next_counter(self._files)
        if not self._files:
            self._recent.replace([])
            self.seed()
            return

        self._recent.replace(persisted.recent)
        self._tabs.restore(
            list(persisted.tabs.open_ids),
            persisted.tabs.active_index,
            {f.id for f in self._files},
        )
        active_id = self._tabs.active_id
        if active_id is not None:
            self._current_index = self.index_of(active_id)
        else:
            self._current_index = 0
            self._tabs.open(self._files[0].id)
        logger.info(
            "Loaded %d files (%d recent, %d open tabs)",
            len(self._files), len(self._recent), len(self._tabs.state().open_ids),
        )

    def seed(self) -> FileRecord:
        """Create the starter document of a fresh store."""
        return self.create_file(self._default_file_name, STARTER_DOCUMENT)

    def save(self) -> bool:
        if self._persistence is None:
            return True
        return self._persistence.save(
            self._files, self._recent.get_recent(), self._tabs.state()
        )

    # --- Read access --------------------------------------------------------

    @property
    def files(self) -> tuple[FileRecord, ...]:
        return tuple(self._files)

    @property
    def current_index(self) -> int:
        return self._current_index

    def __len__(self) -> int:
        return len(self._files)

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(files=tuple(self._files), current_index=self._current_index)

    def index_of(self, file_id: str) -> int:
        for i, record in enumerate(self._files):
            if record.id == file_id:
                return i
        return NO_SELECTION

    def find(self, file_id: str) -> FileRecord | None:
        index = self.index_of(file_id)
        return self._files[index] if index != NO_SELECTION else None

    def get(self, file_id: str) -> FileRecord:
        record = self.find(file_id)
        if record is None:
            raise NotFoundError(file_id)
        return record

    def find_by_name(self, name: str) -> FileRecord | None:
        for record in self._files:
            if record.name == name:
                return record
        return None

    def get_current(self) -> FileRecord | None:
        if 0 <= self._current_index < len(self._files):
            return self._files[self._current_index]
        return None

    # --- Creation -----------------------------------------------------------

    def create_file(self, name: str, content: str = "") -> FileRecord:
        """Add a new file and make it current."""
        naming.check_well_formed(name)
        self._ensure_free(name)
        record = self._append(name, content, kind_for_name(name))
        self._current_index = len(self._files) - 1
        self._tabs.open(record.id)
        self.save()
        logger.info("Created file %s (%s)", record.name, record.id)
        return record

    def create_folder(self, name: str) -> FileRecord:
        """Make ``name`` visible as a folder via a ``name/.keep`` placeholder."""
        naming.check_folder_name(name)
        if self.folder_exists(name):
            raise DuplicateNameError(name, "A folder with this name already exists.")
        record = self._append(
            naming.join(name, naming.PLACEHOLDER_NAME),
            PLACEHOLDER_CONTENT,
            FileKind.PLAIN_TEXT,
        )
        self.save()
        logger.info("Created folder %s", name)
        return record

    def folder_exists(self, name: str) -> bool:
        prefix = name + "/"
        return any(r.name == name or r.name.startswith(prefix) for r in self._files)

    def duplicate_file(self, file_id: str) -> FileRecord:
        """Copy a file to ``<stem>_copy.<ext>``; the selection is unchanged."""
        source = self.get(file_id)
        new_name = naming.copy_name(source.name)
        self._ensure_free(new_name)
        record = self._append(new_name, source.content, source.kind)
        self.save()
        logger.info("Duplicated file %s -> %s", source.name, new_name)
        return record

    # --- Selection ----------------------------------------------------------

    def set_current_by_index(self, index: int) -> FileRecord:
        if not 0 <= index < len(self._files):
            raise NotFoundError(index, f"No file at index {index}")
        return self._open(index)

    def set_current_by_id(self, file_id: str) -> FileRecord:
        index = self.index_of(file_id)
        if index == NO_SELECTION:
            raise NotFoundError(file_id)
        return self._open(index)

    def _open(self, index: int) -> FileRecord:
        record = self._files[index]
        self._current_index = index
        self._tabs.open(record.id)
        self._recent.add(record.id, record.name)
        self.save()
        return record

    # --- Mutation -----------------------------------------------------------

    def update_content(self, file_id: str, content: str) -> FileRecord:
        index = self._require_index(file_id)
        record = replace(self._files[index], content=content)
        self._files[index] = record
        self.save()
        return record

    def update_current_content(self, content: str) -> FileRecord | None:
        """Editor entry point — no-op when nothing is selected."""
        current = self.get_current()
        if current is None:
            return None
        return self.update_content(current.id, content)

    def rename(self, file_id: str, new_name: str) -> FileRecord:
        """Rename a file.

        A bare filename keeps the file in its folder; a name containing
        ``/`` is taken as the complete new path. Recent-file entries keep
        their cached name until the file is opened again.
        """
        index = self._require_index(file_id)
        record = self._files[index]
        naming.check_file_path(new_name)
        full_name = new_name if "/" in new_name else naming.join(record.folder, new_name)
        if full_name == record.name:
            return record
        self._ensure_free(full_name, exclude_id=file_id)

        renamed = replace(record, name=full_name, kind=kind_for_name(full_name))
        self._files[index] = renamed
        self.save()
        logger.info("Renamed %s -> %s", record.name, full_name)
        return renamed

    def move(self, file_id: str, target_folder: str | None) -> FileRecord:
        """Move a file into ``target_folder`` (None or '' for the root)."""
        index = self._require_index(file_id)
        record = self._files[index]
        if target_folder:
            naming.check_folder_name(target_folder)
        full_name = naming.join(target_folder or None, record.basename)
        if full_name == record.name:
            return record
        naming.check_file_path(full_name)
        self._ensure_free(
            full_name,
            exclude_id=file_id,
            message="A file with this name already exists in the target location.",
        )

        moved = replace(record, name=full_name)
        self._files[index] = moved
        self.save()
        logger.info("Moved %s -> %s", record.name, full_name)
        return moved

    def delete_file(self, file_id: str) -> FileRecord:
        index = self._require_index(file_id)
        was_current = index == self._current_index
        record = self._files.pop(index)

        if not self._files:
            self._current_index = NO_SELECTION
        elif self._current_index >= len(self._files):
            self._current_index = len(self._files) - 1
        elif was_current and index > 0:
            self._current_index = index - 1

        self._tabs.close(file_id)
        current = self.get_current()
        if current is not None:
            self._tabs.open(current.id)
        self.save()
        logger.info("Deleted file %s", record.name)
        return record

    # --- Recent files -------------------------------------------------------

    def add_to_recent(self, file_id: str) -> RecentFileEntry:
        record = self.get(file_id)
        entry = self._recent.add(record.id, record.name)
        self.save()
        return entry

    def get_recent(self) -> list[RecentFileEntry]:
        return self._recent.get_recent()

    def clear_recent(self) -> None:
        self._recent.clear()
        self.save()

    def recent_view(self) -> list[tuple[RecentFileEntry, FileRecord | None]]:
        return self._recent.resolve(self.find)

    # --- Tabs ---------------------------------------------------------------

    def tab_state(self) -> TabState:
        return self._tabs.state()

    def open_tab_records(self) -> list[FileRecord]:
        records = (self.find(i) for i in self._tabs.state().open_ids)
        return [r for r in records if r is not None]

    def open_tab(self, file_id: str) -> FileRecord:
        return self.set_current_by_id(file_id)

    def close_tab(self, file_id: str) -> FileRecord | None:
        self.get(file_id)
        return self._follow_active_tab(self._tabs.close(file_id))

    def close_other_tabs(self, keep_id: str) -> FileRecord | None:
        self.get(keep_id)
        return self._follow_active_tab(self._tabs.close_others(keep_id))

    def close_tabs_to_right(self, file_id: str) -> FileRecord | None:
        self.get(file_id)
        return self._follow_active_tab(self._tabs.close_to_right(file_id))

    def close_all_tabs(self) -> None:
        self._tabs.close_all()
        self._follow_active_tab(None)

    def _follow_active_tab(self, active_id: str | None) -> FileRecord | None:
        self._current_index = (
            self.index_of(active_id) if active_id is not None else NO_SELECTION
        )
        self.save()
        return self.get_current()

    # --- Internals ----------------------------------------------------------

    def _append(self, name: str, content: str, kind: FileKind) -> FileRecord:
        record = FileRecord(id=self._generate_id(), name=name, content=content, kind=kind)
        self._files.append(record)
        return record

    def _generate_id(self) -> str:
        """``file_<millis>_<counter>`` — the counter keeps ids unique on clock ties."""
        taken = {r.id for r in self._files}
        while True:
            file_id = f"file_{self._clock()}_{self._counter}"
            self._counter += 1
            if file_id not in taken:
                return file_id

    @staticmethod
    def _next_counter(records: list[FileRecord]) -> int:
        counter = len(records)
        for record in records:
            match = _ID_RE.match(record.id)
            if match:
                counter = max(counter, int(match.group(1)) + 1)
        return counter

    def _require_index(self, file_id: str) -> int:
        index = self.index_of(file_id)
        if index == NO_SELECTION:
            raise NotFoundError(file_id)
        return index

    def _ensure_free(
        self, name: str, exclude_id: str | None = None, message: str | None = None
    ) -> None:
        for record in self._files:
            if record.name == name and record.id != exclude_id:
                raise DuplicateNameError(name, message)
