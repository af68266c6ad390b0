"""Runtime settings for UpdateKit.

Settings come from ``UPDATEKIT_*`` environment variables:

- ``UPDATEKIT_UNPACK200``: explicit path to the ``unpack200`` executable
- ``UPDATEKIT_COPY_BUFFER_SIZE``: chunk size in bytes for streamed copies
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from updatekit.core.constants import (
    COPY_BUFFER_SIZE,
    ENV_PREFIX,
    UNPACK200_EXECUTABLE,
)

__all__ = ["Settings", "get_settings", "reset_settings", "resolve_unpack200"]


class Settings(BaseModel):
    """Environment-derived settings.

    Attributes:
        unpack200_path: Explicit location of the unpack200 tool
        copy_buffer_size: Chunk size used when streaming file contents
    """

    unpack200_path: Path | None = None
    copy_buffer_size: int = Field(default=COPY_BUFFER_SIZE, gt=0)

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Validated Settings instance

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        values: dict[str, object] = {}
        unpack200 = env.get(f"{ENV_PREFIX}UNPACK200")
        if unpack200:
            values["unpack200_path"] = Path(unpack200).expanduser()
        buffer_size = env.get(f"{ENV_PREFIX}COPY_BUFFER_SIZE")
        if buffer_size:
            values["copy_buffer_size"] = buffer_size

        return cls.model_validate(values)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment once."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next lookup re-reads the environment."""
    global _settings
    _settings = None


def resolve_unpack200(settings: Settings | None = None) -> Path | None:
    """Locate the unpack200 executable.

    Checks the explicit setting first, then ``PATH``, then ``$JAVA_HOME/bin``.

    Args:
        settings: Settings to consult (defaults to process settings)

    Returns:
        Path to the executable, or None if it cannot be found
    """
    settings = settings or get_settings()

    if settings.unpack200_path is not None:
        return settings.unpack200_path if settings.unpack200_path.is_file() else None

    found = shutil.which(UNPACK200_EXECUTABLE)
    if found:
        return Path(found)

    java_home = os.getenv("JAVA_HOME")
    if java_home:
        found = shutil.which(UNPACK200_EXECUTABLE, path=str(Path(java_home) / "bin"))
        if found:
            return Path(found)

    return None
