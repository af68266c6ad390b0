"""Replace, copy and line-reading operations.

This module provides the file replacement used when installing updated
files. Renaming over an existing file is not possible everywhere (some
platforms refuse to rename over a file another process holds open), so
replacement escalates through several techniques until one works.
"""

import io
import re
import shutil
from collections.abc import Callable
from typing import IO, Any

import structlog

from updatekit.core.config import get_settings
from updatekit.fs.paths import PathLike, as_path, delete_quietly, old_path
from updatekit.utils.debug import debug

log = structlog.get_logger(__name__)

# the terminators a line may end with; other Unicode breaks stay in the line
_LINE_END = re.compile(r"\r\n|\r|\n")

ReplaceStrategy = Callable[[PathLike, PathLike], bool]


def rename_over(source: PathLike, dest: PathLike) -> bool:
    """Rename ``source`` onto ``dest`` with a single native rename."""
    source, dest = as_path(source), as_path(dest)
    try:
        source.rename(dest)
    except OSError as e:
        debug(f"Direct rename failed: {source} -> {dest}: {e}")
        return False

    debug(f"Direct rename: {source} -> {dest}")
    return True


def displace_and_rename(source: PathLike, dest: PathLike) -> bool:
    """Move an existing ``dest`` aside, then rename ``source`` into place.

    The displaced file is parked at ``<dest>_old`` and deleted once the
    source is in place. If the source cannot be renamed, the displaced file
    is moved back so the destination is left as it was.

    Args:
        source: File to move into place
        dest: Existing file to replace

    Returns:
        True if ``source`` now lives at ``dest``
    """
    source, dest = as_path(source), as_path(dest)
    if not dest.exists():
        return False

    temp = old_path(dest)
    if temp.exists() and not delete_quietly(temp, "old intermediate file"):
        # the renames below will most likely fail as well
        debug(f"Stale intermediate file remains: {temp}")

    try:
        dest.rename(temp)
    except OSError as e:
        debug(f"Could not displace {dest}: {e}")
        return False

    try:
        source.rename(dest)
    except OSError as e:
        debug(f"Rename after displacing failed: {source} -> {dest}: {e}")
        try:
            temp.rename(dest)
        except OSError as restore_error:
            log.warning(
                "fs.replace.restore_failed",
                dest=str(dest),
                intermediate=str(temp),
                error=str(restore_error),
            )
        return False

    delete_quietly(temp, "intermediate file")
    debug(f"Displace and rename: {source} -> {dest}")
    return True


def copy_over(source: PathLike, dest: PathLike) -> bool:
    """Overwrite ``dest`` in place with the bytes of ``source``.

    Works when ``dest`` cannot be renamed but can still be written. The
    source is deleted afterwards; failing to delete it is only logged since
    the data has already landed.
    """
    source, dest = as_path(source), as_path(dest)
    try:
        copy(source, dest)
    except OSError as e:
        log.warning(
            "fs.replace.copy_failed", source=str(source), dest=str(dest), error=str(e)
        )
        return False

    if not delete_quietly(source, "source after brute force copy"):
        debug(f"Copied {source} -> {dest} but the source remains")
    else:
        debug(f"Brute force copy: {source} -> {dest}")
    return True


#: Replacement techniques in the order they are attempted
REPLACE_STRATEGIES: tuple[ReplaceStrategy, ...] = (
    rename_over,
    displace_and_rename,
    copy_over,
)


def rename_to(
    source: PathLike,
    dest: PathLike,
    strategies: tuple[ReplaceStrategy, ...] = REPLACE_STRATEGIES,
) -> bool:
    """Get ``source`` to ``dest`` by whatever technique the platform allows.

    Each strategy is tried in order until one succeeds. Failures are never
    raised: callers get a boolean and decide themselves whether to retry.

    Args:
        source: File holding the new content; gone afterwards on success
        dest: File to replace (need not exist)
        strategies: Replacement techniques to try, in order

    Returns:
        True if ``dest`` now holds the content of ``source``
    """
    for strategy in strategies:
        if strategy(source, dest):
            return True
    return False


def copy(source: PathLike, target: PathLike) -> None:
    """Copy the bytes of ``source`` to ``target``.

    ``source`` is opened before ``target`` so a missing source never
    truncates the target.

    Raises:
        OSError: If either file cannot be opened, read or written
    """
    buffer_size = get_settings().copy_buffer_size
    with open(as_path(source), "rb") as fin, open(as_path(target), "wb") as fout:
        shutil.copyfileobj(fin, fout, buffer_size)


def read_lines(reader: IO[Any], encoding: str = "utf-8") -> list[str]:
    """Read every line of ``reader`` and close it.

    Binary streams are decoded with ``encoding``. Lines end at LF, CRLF or
    a lone CR, whatever newline mode the stream was opened with.
    Terminators are stripped and blank lines come back as empty strings.
    The reader is closed whether or not reading succeeds.

    Args:
        reader: Open text or binary stream; owned by this call afterwards
        encoding: Encoding used to decode binary streams

    Returns:
        Lines in file order

    Raises:
        OSError: If reading fails (after the reader has been closed)
        UnicodeDecodeError: If a binary stream is not valid ``encoding``
    """
    stream: IO[Any] = reader
    try:
        if isinstance(reader, (io.RawIOBase, io.BufferedIOBase)):
            stream = io.TextIOWrapper(reader, encoding=encoding, newline="")
        text = stream.read()
    finally:
        stream.close()

    lines = _LINE_END.split(text)
    # a trailing terminator ends the last line rather than starting a new one
    if lines[-1] == "":
        lines.pop()
    return lines
