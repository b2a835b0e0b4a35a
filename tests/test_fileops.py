"""Tests for electroforge.fileops."""

from pathlib import Path

import pytest

from electroforge.fileops import copy_file, copy_tree, is_empty_dir


@pytest.fixture
def source(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    (src / "nested" / "deeper").mkdir(parents=True)
    (src / "top.txt").write_text("top")
    (src / "nested" / "mid.txt").write_text("mid")
    (src / "nested" / "deeper" / "leaf.bin").write_bytes(b"\x00\x01\x02")
    (src / ".hidden").write_text("dot")
    return src


class TestCopyTree:
    """Tests for recursive template copying."""

    def test_copies_structure(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"

        copy_tree(source, dest)

        assert (dest / "top.txt").read_text() == "top"
        assert (dest / "nested" / "mid.txt").read_text() == "mid"
        assert (dest / "nested" / "deeper" / "leaf.bin").read_bytes() == b"\x00\x01\x02"
        assert (dest / ".hidden").read_text() == "dot"

    def test_returns_written_files(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"

        written = copy_tree(source, dest)

        assert sorted(p.relative_to(dest).as_posix() for p in written) == [
            ".hidden",
            "nested/deeper/leaf.bin",
            "nested/mid.txt",
            "top.txt",
        ]

    def test_overwrites_existing(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"
        (dest / "nested").mkdir(parents=True)
        (dest / "nested" / "mid.txt").write_text("old")
        (dest / "keep.txt").write_text("untouched")

        copy_tree(source, dest)

        assert (dest / "nested" / "mid.txt").read_text() == "mid"
        assert (dest / "keep.txt").read_text() == "untouched"

    def test_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            copy_tree(tmp_path / "missing", tmp_path / "dest")

    def test_source_is_file(self, source: Path, tmp_path: Path) -> None:
        with pytest.raises(NotADirectoryError):
            copy_tree(source / "top.txt", tmp_path / "dest")

    def test_propagates_write_errors(self, source: Path, tmp_path: Path) -> None:
        """A file in the way of a directory stops the copy."""
        dest = tmp_path / "dest"
        dest.mkdir()
        (dest / "nested").write_text("not a directory")

        with pytest.raises(OSError):
            copy_tree(source, dest)


class TestCopyFile:
    """Tests for single file copies."""

    def test_creates_parents(self, source: Path, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c.txt"

        copy_file(source / "top.txt", target)

        assert target.read_text() == "top"

    def test_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            copy_file(tmp_path / "missing.txt", tmp_path / "out.txt")


class TestIsEmptyDir:
    def test_empty(self, tmp_path: Path) -> None:
        assert is_empty_dir(tmp_path)

    def test_not_empty(self, tmp_path: Path) -> None:
        (tmp_path / ".keep").touch()
        assert not is_empty_dir(tmp_path)
