"""Unpacking of pack200 packed jar files.

A packed jar is turned back into a standard jar written at a target path.
Payloads named ``*.gz`` are fully decompressed into a ``<name>.gunzip``
staging file before unpacking, so a truncated or corrupted gzip stream is
detected before the unpacker ever reads from it.

The unpack transform itself is pluggable. The default runs the JDK's
``unpack200`` tool.
"""

import gzip
import shutil
import subprocess
import tempfile
import zipfile
import zlib
from collections.abc import Callable
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO

import structlog

from updatekit.core.config import Settings, get_settings, resolve_unpack200
from updatekit.core.constants import UNPACK200_EXECUTABLE
from updatekit.core.errors import ToolNotFound, UnpackError
from updatekit.fs.paths import (
    PathLike,
    as_path,
    delete_quietly,
    gunzip_path,
    is_gzip_name,
)
from updatekit.utils.debug import debug

log = structlog.get_logger(__name__)

#: Reads a packed payload and writes the reconstituted entries to a jar
Unpacker = Callable[[BinaryIO, zipfile.ZipFile], None]

# truncated gzip streams raise EOFError, corrupted deflate data zlib.error;
# closing a jar with an entry still open for writing raises ValueError
_UNPACK_ERRORS = (
    OSError,
    EOFError,
    ValueError,
    zlib.error,
    zipfile.BadZipFile,
    UnpackError,
)


class Unpack200:
    """Unpack transform backed by the external ``unpack200`` tool.

    The payload is copied into a private temporary directory, unpacked there
    and the resulting entries are copied into the caller's jar writer.
    """

    def __init__(
        self, executable: Path | None = None, settings: Settings | None = None
    ) -> None:
        """Initialize the transform.

        Args:
            executable: Explicit unpack200 path; looked up on each call if None
            settings: Settings used for tool lookup and buffer sizing
        """
        self.executable = executable
        self.settings = settings

    def __call__(self, packed: BinaryIO, jar_out: zipfile.ZipFile) -> None:
        settings = self.settings or get_settings()
        archive = getattr(packed, "name", "<stream>")

        executable = self.executable or resolve_unpack200(settings)
        if executable is None:
            raise ToolNotFound(archive, UNPACK200_EXECUTABLE)

        with tempfile.TemporaryDirectory(prefix="updatekit-") as workdir:
            packed_copy = Path(workdir) / "payload.pack"
            unpacked = Path(workdir) / "payload.jar"
            with open(packed_copy, "wb") as staged:
                shutil.copyfileobj(packed, staged, settings.copy_buffer_size)

            result = subprocess.run(
                [str(executable), str(packed_copy), str(unpacked)],
                capture_output=True,
                text=True,
                check=False,
            )
            if result.returncode != 0:
                raise UnpackError(
                    archive,
                    result.stderr.strip() or f"{executable} failed",
                    returncode=result.returncode,
                )

            with zipfile.ZipFile(unpacked) as jar_in:
                for info in jar_in.infolist():
                    jar_out.writestr(info, jar_in.read(info))


def unpack_packed200_jar(
    packed_jar: PathLike,
    target: PathLike,
    unpacker: Unpacker | None = None,
) -> bool:
    """Unpack a pack200 packed jar into a standard jar.

    If ``packed_jar`` has a ``.gz`` extension it is gunzipped first. Every
    stream opened along the way is closed and the ``.gunzip`` staging file
    removed before returning, whatever the outcome. On failure the target
    file is removed as well.

    Args:
        packed_jar: Packed payload, optionally gzip-compressed
        target: Jar file to create or overwrite
        unpacker: Unpack transform (defaults to :class:`Unpack200`)

    Returns:
        True if the jar was written, False otherwise
    """
    packed_jar, target = as_path(packed_jar), as_path(target)
    unpacker = unpacker or Unpack200()
    target_opened = False

    try:
        with ExitStack() as stack:
            target_out = stack.enter_context(open(target, "wb"))
            target_opened = True
            jar_out = stack.enter_context(
                zipfile.ZipFile(target_out, "w", zipfile.ZIP_DEFLATED)
            )
            packed_in: BinaryIO = stack.enter_context(open(packed_jar, "rb"))
            if is_gzip_name(packed_jar):
                packed_in = _gunzip_to_staging(packed_jar, packed_in, stack)
            unpacker(packed_in, jar_out)
    except _UNPACK_ERRORS as e:
        log.warning(
            "fs.unpack.failed",
            jar=str(packed_jar),
            target=str(target),
            error=str(e) or type(e).__name__,
        )
        if target_opened:
            delete_quietly(target, "partially unpacked jar")
        return False

    debug(f"Unpacked {packed_jar} -> {target}")
    return True


def _gunzip_to_staging(
    packed_jar: Path, packed_in: BinaryIO, stack: ExitStack
) -> BinaryIO:
    """Decompress the payload next to itself and reopen the staged copy."""
    staging = gunzip_path(packed_jar)
    # registered first so it runs after the staged reader is closed
    stack.callback(delete_quietly, staging, "gunzipped pack file")

    buffer_size = get_settings().copy_buffer_size
    with (
        gzip.GzipFile(fileobj=packed_in, mode="rb") as gz_in,
        open(staging, "wb") as staged_out,
    ):
        shutil.copyfileobj(gz_in, staged_out, buffer_size)
    packed_in.close()

    debug(f"Gunzipped {packed_jar} -> {staging}")
    return stack.enter_context(open(staging, "rb"))
