"""File and folder upload into the file store.

Each file of a folder upload is read as an independent task; the batch
waits for every read to settle before reporting. Records land in the store
in read-completion order, which need not match the sorted attempt order.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Sequence

from codepad.config import DEFAULT_UPLOAD_EXTENSIONS
from codepad.services import naming
from codepad.services.errors import CodepadError, ReadError, UploadError
from codepad.services.file_kinds import extension_of
from codepad.services.file_store import FileRecord, FileStore

logger = logging.getLogger(__name__)

Reader = Callable[[], Awaitable[str | bytes]]


@dataclass
class UploadSource:
    """One file handed over by the host platform."""

    name: str
    reader: Reader
    relative_path: str | None = None  # folder uploads: "root/sub/file.js"

    @property
    def path(self) -> str:
        return self.relative_path or self.name

    async def read_text(self) -> str:
        try:
            data = await self.reader()
        except OSError as e:
            raise ReadError(self.name) from e
        if isinstance(data, bytes):
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ReadError(self.name, "File is not valid UTF-8 text") from e
        return data


@dataclass
class UploadResult:
    succeeded: int
    failed_count: int
    failed_files: list[dict] = field(default_factory=list)  # {name, error}
    skipped_files: list[str] = field(default_factory=list)
    records: list[FileRecord] = field(default_factory=list)


def is_supported(name: str, extensions: Iterable[str] = DEFAULT_UPLOAD_EXTENSIONS) -> bool:
    base = naming.basename(name)
    return "." in base and extension_of(base) in set(extensions)


async def upload_file(store: FileStore, source: UploadSource) -> FileRecord:
    """Import a single file under its own name."""
    content = await source.read_text()
    return store.create_file(source.name, content)


async def upload_folder(
    store: FileStore,
    sources: Sequence[UploadSource],
    extensions: Iterable[str] = DEFAULT_UPLOAD_EXTENSIONS,
) -> UploadResult:
    """Import every supported text file of an uploaded folder.

    Succeeds when at least one file was imported. Name collisions with
    existing files are reported as failures; nothing is overwritten.
    """
    if not sources:
        raise UploadError("No files selected")

    ordered = sorted(sources, key=lambda s: s.path)
    first = ordered[0]
    root_folder = first.relative_path.split("/")[0] if first.relative_path else ""

    extensions = list(extensions)
    processable = [s for s in ordered if is_supported(s.name, extensions)]
    skipped = [s.path for s in ordered if not is_supported(s.name, extensions)]
    if not processable:
        raise UploadError("No supported text files found in folder")

    imported: list[FileRecord] = []
    failed: list[dict] = []

    async def _import(source: UploadSource) -> None:
        try:
            content = await source.read_text()
            display_path = naming.strip_root_folder(source.path, root_folder)
            imported.append(store.create_file(display_path, content))
        except CodepadError as e:
            failed.append({"name": source.name, "error": e.message})

    outcomes = await asyncio.gather(
        *(_import(s) for s in processable), return_exceptions=True
    )
    for source, outcome in zip(processable, outcomes):
        if isinstance(outcome, Exception):
            logger.error("Unexpected error importing %s: %s", source.path, outcome)
            failed.append({"name": source.name, "error": str(outcome)})

    if skipped:
        logger.info("Upload skipped %d unsupported files", len(skipped))

    if not imported:
        logger.warning("Folder upload failed: %d files could not be imported", len(failed))
        raise UploadError("No valid files could be uploaded", failed_files=failed)

    store.set_current_by_id(imported[0].id)
    logger.info("Folder upload: %d imported, %d failed", len(imported), len(failed))
    return UploadResult(
        succeeded=len(imported),
        failed_count=len(failed),
        failed_files=failed,
        skipped_files=skipped,
        records=imported,
    )
