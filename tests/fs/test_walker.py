"""Tests for the iterative tree walker."""

import os
from pathlib import Path

import pytest

from updatekit.fs.walker import _children, walk_tree


class TestWalkTree:
    """Test visiting every file and directory beneath a root."""

    def test_visits_every_entry_once(self, sample_tree: Path) -> None:
        """Test the a.txt, dir1/b.txt, dir1/dir2/c.txt tree."""
        visited: list[Path] = []

        walk_tree(sample_tree, visited.append)

        relative = sorted(p.relative_to(sample_tree).as_posix() for p in visited)
        assert relative == [
            "a.txt",
            "dir1",
            "dir1/b.txt",
            "dir1/dir2",
            "dir1/dir2/c.txt",
        ]
        files = [p for p in visited if p.is_file()]
        assert len(files) == 3

    def test_root_is_not_visited(self, sample_tree: Path) -> None:
        """Test that only descendants reach the visitor."""
        visited: list[Path] = []

        walk_tree(str(sample_tree), visited.append)

        assert sample_tree not in visited
        assert all(isinstance(p, Path) for p in visited)

    def test_empty_root(self, tmp_path: Path) -> None:
        """Test that an empty directory produces no visits."""
        visited: list[Path] = []

        walk_tree(tmp_path, visited.append)

        assert visited == []

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        """Test that an unlistable root is reported to the caller."""
        with pytest.raises(FileNotFoundError):
            walk_tree(tmp_path / "nope", lambda path: None)

    def test_entry_deleted_mid_walk_is_skipped(self, tmp_path: Path) -> None:
        """Test that a leaf removed after discovery is never visited."""
        bundle = tmp_path / "bundle"
        bundle.mkdir()
        (bundle / "x.jar").write_text("x")
        (bundle / "y.jar").write_text("y")
        visited: list[Path] = []

        def delete_sibling(path: Path) -> None:
            visited.append(path)
            if path.parent == bundle:
                for sibling in ("x.jar", "y.jar"):
                    (bundle / sibling).unlink(missing_ok=True)

        walk_tree(tmp_path, delete_sibling)

        assert len(visited) == 2
        assert visited[0] == bundle
        assert visited[1].name in ("x.jar", "y.jar")

    def test_visitor_can_delete_files_it_visits(self, sample_tree: Path) -> None:
        """Test cleanup use: deleting every visited file as the walk goes."""
        visited: list[Path] = []

        def clean(path: Path) -> None:
            visited.append(path)
            if path.is_file():
                path.unlink()

        walk_tree(sample_tree, clean)

        assert len(visited) == 5
        assert not any(p.is_file() for p in sample_tree.rglob("*"))

    def test_symlink_loop_is_not_followed_forever(self, tmp_path: Path) -> None:
        """Test that a link back to an ancestor is visited but not re-entered."""
        top = tmp_path / "top"
        top.mkdir()
        (top / "f.txt").write_text("f")
        try:
            os.symlink(top, top / "loop", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symbolic links are not available")
        visited: list[Path] = []

        walk_tree(tmp_path, visited.append)

        assert sorted(p.relative_to(tmp_path).as_posix() for p in visited) == [
            "top",
            "top/f.txt",
            "top/loop",
        ]

    def test_aliased_directory_reported_under_real_path(
        self, tmp_path: Path
    ) -> None:
        """Test that a directory linked from elsewhere is walked via its real path."""
        real = tmp_path / "lib"
        real.mkdir()
        (real / "app.jar").write_text("jar")
        try:
            os.symlink(real, tmp_path / "current", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symbolic links are not available")
        visited: list[Path] = []

        walk_tree(tmp_path, visited.append)

        assert sorted(p.relative_to(tmp_path).as_posix() for p in visited) == [
            "current",
            "lib",
            "lib/app.jar",
        ]


def test_children_of_vanished_directory(tmp_path: Path) -> None:
    """Test that a directory removed before listing yields nothing."""
    assert list(_children(tmp_path / "vanished")) == []
