"""API route registration."""

from fastapi import APIRouter

from codepad.api.routes import files, folders, health, notifications, recent, search, tabs, upload

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(files.router, prefix="/files", tags=["files"])
api_router.include_router(folders.router, tags=["folders"])
api_router.include_router(search.router, tags=["search"])
api_router.include_router(recent.router, prefix="/recent", tags=["recent"])
api_router.include_router(tabs.router, prefix="/tabs", tags=["tabs"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
