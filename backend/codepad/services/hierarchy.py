"""Folder view derived from flat virtual paths.

Grouping is one level deep: ``a/b/c.txt`` lands in folder ``a`` with
relative path ``b/c.txt``. The view is rebuilt on every call and must not be
cached across store mutations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from codepad.services.file_store import FileRecord


@dataclass(frozen=True)
class GroupedRecord:
    record: FileRecord
    relative_path: str


@dataclass
class FolderView:
    root_files: list[FileRecord] = field(default_factory=list)
    folders: dict[str, list[GroupedRecord]] = field(default_factory=dict)


def group_by_folder(
    records: Iterable[FileRecord], include_placeholders: bool = False
) -> FolderView:
    """Split records into root files and first-level folders, in input order.

    A placeholder (``folder/.keep``) registers its folder but is only listed
    when ``include_placeholders`` is set.
    """
    view = FolderView()
    for record in records:
        folder, sep, rest = record.name.partition("/")
        if not sep:
            view.root_files.append(record)
            continue
        entries = view.folders.setdefault(folder, [])
        if record.is_placeholder and not include_placeholders:
            continue
        entries.append(GroupedRecord(record=record, relative_path=rest))
    return view


def folder_names(records: Iterable[FileRecord]) -> list[str]:
    return list(group_by_folder(records).folders)


def folder_exists(records: Iterable[FileRecord], name: str) -> bool:
    prefix = name + "/"
    return any(r.name == name or r.name.startswith(prefix) for r in records)
