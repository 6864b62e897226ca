"""FastAPI dependency injection — the file store handed to each route."""

from __future__ import annotations

from fastapi import Request

from codepad.services import Services
from codepad.services.file_store import FileStore
from codepad.services.notifications import Notifier


def get_services(request: Request) -> Services:
    services: Services | None = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return services


def get_file_store(request: Request) -> FileStore:
    return get_services(request).store


def get_notifier(request: Request) -> Notifier:
    return get_services(request).notifier
