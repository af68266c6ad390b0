"""Path utilities for filesystem operations.

This module names the intermediate artifacts that replace and unpack
operations stage next to the files they work on, and provides the
best-effort delete used to clean them up.
"""

import os
from pathlib import Path

import structlog

from updatekit.core.constants import GUNZIP_SUFFIX, GZIP_SUFFIX, OLD_SUFFIX
from updatekit.utils.debug import debug

log = structlog.get_logger(__name__)

PathLike = str | os.PathLike[str]


def as_path(path: PathLike) -> Path:
    """Coerce a string or path-like object to a Path.

    Paths are not resolved: callers may pass relative paths and every
    operation re-queries the filesystem on each access.
    """
    return path if isinstance(path, Path) else Path(path)


def old_path(dest: PathLike) -> Path:
    """Get the sibling path a destination is displaced to during a replace.

    Args:
        dest: Destination file being replaced

    Returns:
        ``<dest>_old`` in the same directory
    """
    dest = as_path(dest)
    return dest.with_name(dest.name + OLD_SUFFIX)


def gunzip_path(packed: PathLike) -> Path:
    """Get the sibling path a gzipped payload is decompressed into."""
    packed = as_path(packed)
    return packed.with_name(packed.name + GUNZIP_SUFFIX)


def is_gzip_name(path: PathLike) -> bool:
    """Check whether a file name carries the gzip suffix."""
    return as_path(path).name.endswith(GZIP_SUFFIX)


def delete_quietly(path: PathLike, what: str = "intermediate file") -> bool:
    """Delete a file, logging instead of raising on failure.

    Args:
        path: File to delete
        what: Description of the file used in the warning

    Returns:
        True if the file no longer exists afterwards
    """
    path = as_path(path)
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        log.warning("fs.delete_failed", what=what, path=str(path), error=str(e))
        return False

    debug(f"Deleted {what}: {path}")
    return True
