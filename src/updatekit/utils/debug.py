"""Debug utility for UpdateKit.

Provides a single debug() function that can be toggled via the
UPDATEKIT_DEBUG environment variable.

Warnings that callers should see (a failed copy, an undeletable `_old` or
`.gunzip` file, a failed unpack) go through structlog. debug() is for the
step-by-step trace an operator turns on when an update misbehaves on one
machine: which replace strategy was tried and why it failed, whether a
payload was gunzipped to its staging file, and which entries a tree walk
skipped because they vanished or were symbolic links. It writes straight
to stdout so it works before, or without, any logging configuration in
the host launcher.

Usage:
    from updatekit.utils.debug import debug

    debug(f"Direct rename: {source} -> {dest}")

Environment:
    UPDATEKIT_DEBUG: Set to '1', 'true', 'yes' (case-insensitive) to enable
                     debug output. Any other value or unset disables it.
"""

import os
import sys
from typing import Any

_TRUTHY = ("1", "true", "yes")

# Determine if debug mode is enabled at module import time
_DEBUG_ENABLED = os.environ.get("UPDATEKIT_DEBUG", "").lower() in _TRUTHY


def debug(msg: Any) -> None:
    """Print debug message if UPDATEKIT_DEBUG is enabled.

    Args:
        msg: Message to print. Will be converted to string.

    Note:
        The environment variable is read at module import time. Changing it
        afterwards has no effect unless the module is reloaded.
    """
    if _DEBUG_ENABLED:
        print(f"[DEBUG] {msg}", file=sys.stdout)
