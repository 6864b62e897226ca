"""Recent files routes."""

from fastapi import APIRouter, Depends

from codepad.api.deps import get_file_store
from codepad.schemas.files import RecentEntryOut
from codepad.services.file_store import FileStore
from codepad.services.recent_files import display_name, time_ago

router = APIRouter()


@router.get("", response_model=list[RecentEntryOut])
async def list_recent(store: FileStore = Depends(get_file_store)):
    """MRU list as stored — entries of deleted files stay until next load."""
    return [
        RecentEntryOut(
            id=entry.id,
            name=display_name(entry, record),
            cached_name=entry.cached_name,
            timestamp=entry.timestamp,
            time_ago=time_ago(entry.timestamp),
            exists=record is not None,
        )
        for entry, record in store.recent_view()
    ]


@router.delete("")
async def clear_recent(store: FileStore = Depends(get_file_store)):
    store.clear_recent()
    return {"cleared": True}
