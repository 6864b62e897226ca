"""SQLAlchemy ORM models for Codepad."""

from codepad.models.base import Base
from codepad.models.storage_entry import StorageEntry

__all__ = [
    "Base",
    "StorageEntry",
]
