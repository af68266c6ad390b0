"""Smoke tests to verify package structure and imports."""

from pathlib import Path


def test_imports_core() -> None:
    """Test that core package can be imported."""
    import updatekit.core  # noqa: F401


def test_imports_fs() -> None:
    """Test that fs package exposes the public operations."""
    import updatekit.fs

    for name in updatekit.fs.__all__:
        assert hasattr(updatekit.fs, name)


def test_imports_utils() -> None:
    """Test that utils package can be imported."""
    import updatekit.utils  # noqa: F401


def test_sample_fixture(sample_tree: Path) -> None:
    """Test that the sample tree fixture has its three files."""
    assert sorted(p.name for p in sample_tree.rglob("*.txt")) == [
        "a.txt",
        "b.txt",
        "c.txt",
    ]
