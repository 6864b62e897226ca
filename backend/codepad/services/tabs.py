"""Open editor tabs — ordered file ids plus the active tab index."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TabState:
    open_ids: tuple[str, ...]
    active_index: int

    @property
    def active_id(self) -> str | None:
        if 0 <= self.active_index < len(self.open_ids):
            return self.open_ids[self.active_index]
        return None


class OpenTabs:
    """Tab bookkeeping only; the file store decides what becomes current.

    Every mutating method returns the id of the tab that is active
    afterwards (or None when no tab is left).
    """

    def __init__(self) -> None:
        self._ids: list[str] = []
        self._active = -1

    def state(self) -> TabState:
        return TabState(open_ids=tuple(self._ids), active_index=self._active)

    @property
    def active_id(self) -> str | None:
        return self.state().active_id

    def is_open(self, file_id: str) -> bool:
        return file_id in self._ids

    def open(self, file_id: str) -> str:
        if file_id not in self._ids:
            self._ids.append(file_id)
        self._active = self._ids.index(file_id)
        return file_id

    def activate(self, file_id: str) -> bool:
        if file_id not in self._ids:
            return False
        self._active = self._ids.index(file_id)
        return True

    def close(self, file_id: str) -> str | None:
        if file_id not in self._ids:
            return self.active_id
        pos = self._ids.index(file_id)
        self._ids.pop(pos)
        if not self._ids:
            self._active = -1
        elif pos < self._active:
            self._active -= 1
        elif self._active >= len(self._ids):
            self._active = len(self._ids) - 1
        return self.active_id

    def close_others(self, keep_id: str) -> str | None:
        if keep_id not in self._ids:
            return self.active_id
        self._ids = [keep_id]
        self._active = 0
        return keep_id

    def close_to_right(self, file_id: str) -> str | None:
        if file_id not in self._ids:
            return self.active_id
        pos = self._ids.index(file_id)
        del self._ids[pos + 1:]
        if self._active > pos:
            self._active = pos
        return self.active_id

    def close_all(self) -> None:
        self._ids = []
        self._active = -1

    def restore(self, open_ids: list[str], active_index: int, known_ids: set[str]) -> None:
        """Install persisted tabs, dropping ids of files that no longer exist."""
        active_id = open_ids[active_index] if 0 <= active_index < len(open_ids) else None
        self._ids = [i for i in dict.fromkeys(open_ids) if i in known_ids]
        if active_id in self._ids:
            self._active = self._ids.index(active_id)
        else:
            self._active = min(active_index, len(self._ids) - 1)
