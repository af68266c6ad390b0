"""Iterative directory tree walker.

Walks a directory tree without recursion, calling a visitor on every file
and directory beneath the root. Other processes may delete entries while a
walk is in progress; such entries are skipped.
"""

from collections import deque
from collections.abc import Callable, Iterable
from pathlib import Path

from updatekit.fs.paths import PathLike, as_path
from updatekit.utils.debug import debug

#: Called once for each existing path discovered during a walk
Visitor = Callable[[Path], None]


def walk_tree(root: PathLike, visitor: Visitor) -> None:
    """Call ``visitor`` on every file and directory beneath ``root``.

    The root itself is not visited. Visitation order is depth-first but
    otherwise unspecified. Entries are checked for existence when they are
    reached, not when they are discovered, so entries removed mid-walk are
    skipped. Symbolic links to directories are visited but never descended
    into, so every path reported lies under ``root`` through real
    directories and a link that loops back into the tree cannot recurse
    forever.

    Args:
        root: Directory to walk
        visitor: Callback receiving each path

    Raises:
        OSError: If ``root`` cannot be listed
    """
    root = as_path(root)
    stack: deque[Path] = deque(root.iterdir())

    while stack:
        current = stack.pop()
        if not current.exists():
            debug(f"Skipping vanished entry: {current}")
            continue

        visitor(current)

        if current.is_symlink():
            debug(f"Not following link: {current}")
        elif current.is_dir():
            stack.extend(_children(current))


def _children(directory: Path) -> Iterable[Path]:
    try:
        return list(directory.iterdir())
    except (FileNotFoundError, NotADirectoryError):
        # removed or replaced since the existence check
        return []
