"""Upload routes — single files and whole folders (multipart)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from codepad.api.deps import get_file_store, get_services
from codepad.schemas.files import FailedUpload, FileOut, UploadResultOut
from codepad.services import Services, naming
from codepad.services.file_store import FileStore
from codepad.services.uploads import UploadSource, upload_file, upload_folder

router = APIRouter()


def _to_source(upload: UploadFile) -> UploadSource:
    """Folder uploads carry the relative path ("root/sub/a.js") as filename."""
    filename = (upload.filename or "").replace("\\", "/")
    return UploadSource(
        name=naming.basename(filename),
        reader=upload.read,
        relative_path=filename if "/" in filename else None,
    )


@router.post("/file", response_model=FileOut, status_code=201)
async def upload_single(
    file: UploadFile = File(...), store: FileStore = Depends(get_file_store)
):
    record = await upload_file(store, _to_source(file))
    return FileOut.from_record(record)


@router.post("/folder", response_model=UploadResultOut)
async def upload_many(
    files: list[UploadFile] = File(...),
    services: Services = Depends(get_services),
):
    """Import all supported text files; succeeds if at least one imported."""
    store = services.store
    result = await upload_folder(
        store,
        [_to_source(f) for f in files],
        extensions=services.config.upload_extensions,
    )
    return UploadResultOut(
        succeeded=result.succeeded,
        failed_count=result.failed_count,
        failed_files=[FailedUpload(**f) for f in result.failed_files],
        skipped_files=result.skipped_files,
        current_index=store.current_index,
    )
