"""Virtual-path grammar and name helpers.

A virtual path is a ``/``-separated file name such as ``src/app/main.js``.
No directory object backs it; folders exist only as name prefixes.
"""

from __future__ import annotations

import re

from codepad.services.errors import InvalidNameError

PLACEHOLDER_NAME = ".keep"
COPY_SUFFIX = "_copy"

_FILE_PATH_RE = re.compile(r"^[a-zA-Z0-9\-_./]+$")
_FOLDER_RE = re.compile(r"^[a-zA-Z0-9\-_/]+$")


def basename(name: str) -> str:
    return name.rsplit("/", 1)[-1]


def folder_of(name: str) -> str | None:
    """Everything before the last ``/``, or None for a root-level file."""
    if "/" not in name:
        return None
    return name.rsplit("/", 1)[0]


def join(folder: str | None, base: str) -> str:
    return f"{folder}/{base}" if folder else base


def is_placeholder(name: str) -> bool:
    return basename(name) == PLACEHOLDER_NAME


def is_well_formed(name: str) -> bool:
    """Structural check only: non-empty segments, no leading/trailing slash."""
    if not name or name.startswith("/") or name.endswith("/"):
        return False
    return all(segment for segment in name.split("/"))


def is_valid_file_path(name: str) -> bool:
    if not _FILE_PATH_RE.match(name) or not is_well_formed(name):
        return False
    if any(segment in (".", "..") for segment in name.split("/")):
        return False
    base = basename(name)
    return "." in base and not base.startswith(".")


def is_valid_folder_name(name: str) -> bool:
    return bool(_FOLDER_RE.match(name)) and is_well_formed(name)


def check_well_formed(name: str) -> str:
    if not is_well_formed(name):
        raise InvalidNameError(name, f"Invalid file path: {name!r}")
    return name


def check_file_path(name: str) -> str:
    if not is_valid_file_path(name):
        raise InvalidNameError(
            name,
            "Invalid file name. Please use only letters, numbers, hyphens, "
            "underscores, and dots, and include an extension.",
        )
    return name


def check_folder_name(name: str) -> str:
    if not is_valid_folder_name(name):
        raise InvalidNameError(
            name,
            "Invalid folder name. Please use only letters, numbers, hyphens, "
            "and underscores.",
        )
    return name


def copy_name(name: str) -> str:
    """``src/app.js`` -> ``src/app_copy.js``; no extension -> suffix appended."""
    folder = folder_of(name)
    base = basename(name)
    stem, dot, ext = base.rpartition(".")
    if dot and stem:
        new_base = f"{stem}{COPY_SUFFIX}.{ext}"
    else:
        new_base = f"{base}{COPY_SUFFIX}"
    return join(folder, new_base)


def strip_root_folder(path: str, root: str) -> str:
    """Drop a leading ``root/`` segment shared by an uploaded folder."""
    prefix = f"{root}/"
    if root and path.startswith(prefix):
        return path[len(prefix):]
    return path
