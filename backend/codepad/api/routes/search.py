"""File name search."""

from fastapi import APIRouter, Depends

from codepad.api.deps import get_file_store
from codepad.schemas.files import FileSummary, SearchHit
from codepad.services.file_store import FileStore
from codepad.services.search import rank

router = APIRouter()


@router.get("/search", response_model=list[SearchHit])
async def search_files(q: str = "", store: FileStore = Depends(get_file_store)):
    return [
        SearchHit(file=FileSummary.from_record(record), score=score)
        for record, score in rank(q, store.files)
    ]
