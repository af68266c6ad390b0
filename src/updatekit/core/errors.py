"""Custom exceptions for UpdateKit.

Plain I/O failures surface as ``OSError`` the way the standard library raises
them. The types here cover failures of the archive unpack transform, which
are not I/O errors in their own right.
"""

from pathlib import Path
from typing import Any


class UpdateKitError(Exception):
    """Base exception for all UpdateKit errors."""

    pass


class UnpackError(UpdateKitError):
    """Raised when a packed archive cannot be turned into a standard archive.

    Attributes:
        archive: Packed archive that was being unpacked
        reason: Human-readable description of the failure
        returncode: Exit status of the external unpacker, if one ran
    """

    def __init__(
        self,
        archive: Path | str,
        reason: str,
        returncode: int | None = None,
    ) -> None:
        """Initialize UnpackError.

        Args:
            archive: Packed archive path
            reason: Reason for the failure
            returncode: Exit status of the unpacker process (optional)
        """
        self.archive = Path(archive)
        self.reason = reason
        self.returncode = returncode

        message = f"Failed to unpack '{self.archive}': {reason}"
        if returncode is not None:
            message += f" (exit status {returncode})"

        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured reporting."""
        result: dict[str, Any] = {
            "error": "unpack_failed",
            "archive": str(self.archive),
            "reason": self.reason,
        }

        if self.returncode is not None:
            result["returncode"] = self.returncode

        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(archive={str(self.archive)!r}, "
            f"reason={self.reason!r}, returncode={self.returncode})"
        )


class ToolNotFound(UnpackError):
    """Raised when the external unpack200 executable cannot be located."""

    def __init__(self, archive: Path | str, tool: str) -> None:
        self.tool = tool
        super().__init__(archive, f"'{tool}' executable not found")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["error"] = "tool_not_found"
        result["tool"] = self.tool
        return result
