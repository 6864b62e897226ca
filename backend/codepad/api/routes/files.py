"""File routes — snapshot, CRUD and the current-file pointer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from codepad.api.deps import get_file_store
from codepad.schemas.files import (
    ContentUpdate,
    FileCreate,
    FileOut,
    MoveRequest,
    RenameRequest,
    SelectRequest,
    StoreSnapshotOut,
)
from codepad.services.file_store import FileStore

router = APIRouter()


@router.get("", response_model=StoreSnapshotOut)
async def list_files(store: FileStore = Depends(get_file_store)):
    """Ordered snapshot of every file plus the current index."""
    snapshot = store.snapshot()
    return StoreSnapshotOut(
        files=[FileOut.from_record(r) for r in snapshot.files],
        current_index=snapshot.current_index,
    )


@router.post("", response_model=FileOut, status_code=201)
async def create_file(body: FileCreate, store: FileStore = Depends(get_file_store)):
    """Create a file; it becomes the current file."""
    return FileOut.from_record(store.create_file(body.name, body.content))


@router.get("/current", response_model=FileOut)
async def get_current(store: FileStore = Depends(get_file_store)):
    current = store.get_current()
    if current is None:
        raise HTTPException(404, "No file is open")
    return FileOut.from_record(current)


@router.post("/current", response_model=FileOut)
async def set_current(body: SelectRequest, store: FileStore = Depends(get_file_store)):
    """Switch the current file by index or id."""
    if body.id is not None:
        record = store.set_current_by_id(body.id)
    else:
        record = store.set_current_by_index(body.index)
    return FileOut.from_record(record)


@router.put("/current/content", response_model=FileOut)
async def update_current_content(
    body: ContentUpdate, store: FileStore = Depends(get_file_store)
):
    """Editor save — replaces the content of the current file."""
    record = store.update_current_content(body.content)
    if record is None:
        raise HTTPException(404, "No file is open")
    return FileOut.from_record(record)


@router.get("/{file_id}", response_model=FileOut)
async def get_file(file_id: str, store: FileStore = Depends(get_file_store)):
    return FileOut.from_record(store.get(file_id))


@router.put("/{file_id}/content", response_model=FileOut)
async def update_content(
    file_id: str, body: ContentUpdate, store: FileStore = Depends(get_file_store)
):
    return FileOut.from_record(store.update_content(file_id, body.content))


@router.post("/{file_id}/rename", response_model=FileOut)
async def rename_file(
    file_id: str, body: RenameRequest, store: FileStore = Depends(get_file_store)
):
    return FileOut.from_record(store.rename(file_id, body.new_name))


@router.post("/{file_id}/move", response_model=FileOut)
async def move_file(
    file_id: str, body: MoveRequest, store: FileStore = Depends(get_file_store)
):
    return FileOut.from_record(store.move(file_id, body.target_folder))


@router.post("/{file_id}/duplicate", response_model=FileOut, status_code=201)
async def duplicate_file(file_id: str, store: FileStore = Depends(get_file_store)):
    return FileOut.from_record(store.duplicate_file(file_id))


@router.delete("/{file_id}")
async def delete_file(file_id: str, store: FileStore = Depends(get_file_store)):
    record = store.delete_file(file_id)
    return {"deleted": record.id, "current_index": store.current_index}
