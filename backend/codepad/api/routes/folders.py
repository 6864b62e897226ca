"""Folder routes — placeholder-backed folders and the derived tree."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from codepad.api.deps import get_file_store
from codepad.schemas.files import FileSummary, FolderCreate, TreeEntry, TreeOut
from codepad.services.file_store import FileStore
from codepad.services.hierarchy import group_by_folder

router = APIRouter()


@router.post("/folders", response_model=FileSummary, status_code=201)
async def create_folder(body: FolderCreate, store: FileStore = Depends(get_file_store)):
    """Create a folder (returns its placeholder file)."""
    return FileSummary.from_record(store.create_folder(body.name))


@router.get("/tree", response_model=TreeOut)
async def file_tree(
    include_placeholders: bool = False, store: FileStore = Depends(get_file_store)
):
    """Folder view, recomputed from the current files on every request."""
    view = group_by_folder(store.files, include_placeholders=include_placeholders)
    return TreeOut(
        root_files=[FileSummary.from_record(r) for r in view.root_files],
        folders={
            name: [
                TreeEntry(file=FileSummary.from_record(e.record), relative_path=e.relative_path)
                for e in entries
            ]
            for name, entries in view.folders.items()
        },
    )
