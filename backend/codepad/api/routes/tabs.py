"""Open tab routes."""

from fastapi import APIRouter, Depends

from codepad.api.deps import get_file_store
from codepad.schemas.files import FileSummary, TabsOut
from codepad.services.file_store import FileStore

router = APIRouter()


def _tabs_out(store: FileStore) -> TabsOut:
    state = store.tab_state()
    return TabsOut(
        tabs=[FileSummary.from_record(r) for r in store.open_tab_records()],
        active_index=state.active_index,
        active_id=state.active_id,
    )


@router.get("", response_model=TabsOut)
async def list_tabs(store: FileStore = Depends(get_file_store)):
    return _tabs_out(store)


@router.post("/{file_id}", response_model=TabsOut)
async def open_tab(file_id: str, store: FileStore = Depends(get_file_store)):
    store.open_tab(file_id)
    return _tabs_out(store)


@router.delete("/{file_id}", response_model=TabsOut)
async def close_tab(file_id: str, store: FileStore = Depends(get_file_store)):
    store.close_tab(file_id)
    return _tabs_out(store)


@router.post("/{file_id}/close-others", response_model=TabsOut)
async def close_other_tabs(file_id: str, store: FileStore = Depends(get_file_store)):
    store.close_other_tabs(file_id)
    return _tabs_out(store)


@router.post("/{file_id}/close-right", response_model=TabsOut)
async def close_tabs_to_right(file_id: str, store: FileStore = Depends(get_file_store)):
    store.close_tabs_to_right(file_id)
    return _tabs_out(store)


@router.delete("", response_model=TabsOut)
async def close_all_tabs(store: FileStore = Depends(get_file_store)):
    store.close_all_tabs()
    return _tabs_out(store)
