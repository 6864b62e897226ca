"""File store schemas — editor, tab bar and preview views."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from codepad.services.file_store import FileRecord


class FileSummary(BaseModel):
    """File metadata without content (tab bar, tree)."""
    id: str
    name: str
    type: str

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileSummary":
        return cls(id=record.id, name=record.name, type=record.kind.value)


class FileOut(FileSummary):
    """Full file including content (editor, preview)."""
    content: str

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileOut":
        return cls(
            id=record.id,
            name=record.name,
            type=record.kind.value,
            content=record.content,
        )


class StoreSnapshotOut(BaseModel):
    """Ordered files plus the current index (-1 = no selection)."""
    files: list[FileOut]
    current_index: int


class FileCreate(BaseModel):
    name: str
    content: str = ""


class ContentUpdate(BaseModel):
    content: str


class RenameRequest(BaseModel):
    new_name: str


class MoveRequest(BaseModel):
    target_folder: str | None = None  # None = root


class SelectRequest(BaseModel):
    """Select by position or by id — exactly one of the two."""
    index: int | None = None
    id: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "SelectRequest":
        if (self.index is None) == (self.id is None):
            raise ValueError("Provide exactly one of 'index' or 'id'")
        return self


class FolderCreate(BaseModel):
    name: str


class TreeEntry(BaseModel):
    file: FileSummary
    relative_path: str


class TreeOut(BaseModel):
    root_files: list[FileSummary]
    folders: dict[str, list[TreeEntry]]


class SearchHit(BaseModel):
    file: FileSummary
    score: int


class RecentEntryOut(BaseModel):
    id: str
    name: str  # live name if the file still exists, else cached
    cached_name: str
    timestamp: int
    time_ago: str
    exists: bool


class TabsOut(BaseModel):
    tabs: list[FileSummary]
    active_index: int
    active_id: str | None = None


class FailedUpload(BaseModel):
    name: str
    error: str


class UploadResultOut(BaseModel):
    succeeded: int
    failed_count: int
    failed_files: list[FailedUpload] = []
    skipped_files: list[str] = []
    current_index: int


class NoticeOut(BaseModel):
    level: str
    message: str
    timestamp: str
