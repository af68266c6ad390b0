"""Core constants for UpdateKit.

This module defines constants used throughout the filesystem operations:
- Suffixes for intermediate artifacts created during replace and unpack
- Streaming and tool lookup defaults
"""

# ============================================================================
# Intermediate Artifacts
# ============================================================================

#: Suffix appended to a destination displaced during a replace
OLD_SUFFIX: str = "_old"

#: Filename suffix that marks a gzip-compressed packed archive
GZIP_SUFFIX: str = ".gz"

#: Suffix of the decompressed staging file written next to a packed archive
GUNZIP_SUFFIX: str = ".gunzip"

# ============================================================================
# Streaming & Tools
# ============================================================================

#: Chunk size in bytes used when streaming file contents
COPY_BUFFER_SIZE: int = 64 * 1024

#: Executable name of the external pack200 unpacker
UNPACK200_EXECUTABLE: str = "unpack200"

#: Environment variable prefix for UpdateKit settings
ENV_PREFIX: str = "UPDATEKIT_"
