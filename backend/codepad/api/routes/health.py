"""Health check."""

from fastapi import APIRouter, Depends

from codepad import __version__
from codepad.api.deps import get_file_store
from codepad.schemas.system import HealthResponse
from codepad.services.file_store import FileStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(store: FileStore = Depends(get_file_store)):
    """Lightweight liveness check used by the editor on startup."""
    return HealthResponse(version=__version__, files=len(store))


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
