"""Pytest configuration and fixtures for UpdateKit tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from updatekit.core.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Make every test start from default UPDATEKIT_* settings."""
    for name in ("UPDATEKIT_UNPACK200", "UPDATEKIT_COPY_BUFFER_SIZE"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Tree with a.txt, dir1/b.txt and dir1/dir2/c.txt under a root."""
    root = tmp_path / "t"
    (root / "dir1" / "dir2").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "dir1" / "b.txt").write_text("b")
    (root / "dir1" / "dir2" / "c.txt").write_text("c")
    return root
