"""Filesystem operations used to install application updates.

This package provides file replacement that copes with platform rename
restrictions, pack200 jar unpacking with gzip staging, line reading and
an iterative tree walker.
"""

from updatekit.fs.fs_ops import copy, read_lines, rename_to
from updatekit.fs.unpack import Unpack200, Unpacker, unpack_packed200_jar
from updatekit.fs.walker import Visitor, walk_tree

__all__ = [
    "Unpack200",
    "Unpacker",
    "Visitor",
    "copy",
    "read_lines",
    "rename_to",
    "unpack_packed200_jar",
    "walk_tree",
]
