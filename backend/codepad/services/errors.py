"""Error taxonomy for the virtual file system."""

from __future__ import annotations

from typing import Any


class CodepadError(Exception):
    """Base class — ``message`` is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateNameError(CodepadError):
    """Create/rename/move/duplicate target name is already taken."""

    def __init__(self, name: str, message: str | None = None):
        super().__init__(message or f"A file with this name already exists: {name}")
        self.name = name


class InvalidNameError(CodepadError):
    """Name violates the virtual-path grammar."""

    def __init__(self, name: str, message: str | None = None):
        super().__init__(message or f"Invalid name: {name!r}")
        self.name = name


class NotFoundError(CodepadError):
    """Operation referenced a missing file id or index."""

    def __init__(self, ref: Any, message: str | None = None):
        super().__init__(message or f"File not found: {ref}")
        self.ref = ref


class StorageError(CodepadError):
    """Durable storage read/write failed."""


class StorageQuotaExceeded(StorageError):
    """Write rejected because the storage quota would be exceeded."""


class ReadError(CodepadError):
    """A single file could not be read during an upload."""

    def __init__(self, name: str, message: str = "Failed to read file"):
        super().__init__(message)
        self.name = name


class UploadError(CodepadError):
    """Upload batch produced nothing usable."""

    def __init__(self, message: str, failed_files: list[dict] | None = None):
        super().__init__(message)
        self.failed_files = failed_files or []
