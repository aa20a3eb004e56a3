"""
Tests for DirectoryMover.
"""

import errno
import os
from unittest.mock import patch

import pytest

from buildpack.filestore import DirectoryMover


@pytest.fixture
def mover():
    return DirectoryMover()


@pytest.fixture
def tree(tmp_path):
    """source/ with a nested file and a symlink."""
    source = tmp_path / "source"
    (source / "nested").mkdir(parents=True)
    (source / "top.txt").write_text("top")
    (source / "nested" / "deep.txt").write_text("deep")
    os.symlink("top.txt", source / "link.txt")
    return source


class TestExists:
    def test_existing_dir(self, mover, tmp_path):
        assert mover.exists(tmp_path) is True

    def test_missing(self, mover, tmp_path):
        assert mover.exists(tmp_path / "missing") is False

    def test_other_errors_propagate(self, mover, tmp_path):
        with patch("buildpack.filestore.directory_mover.os.stat", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                mover.exists(tmp_path)


class TestCopyDirectory:
    def test_copies_recursively(self, mover, tree, tmp_path):
        dest = tmp_path / "dest"

        mover.copy_directory(tree, dest)

        assert (dest / "top.txt").read_text() == "top"
        assert (dest / "nested" / "deep.txt").read_text() == "deep"
        assert (tree / "top.txt").exists()

    def test_preserves_symlinks(self, mover, tree, tmp_path):
        dest = tmp_path / "dest"

        mover.copy_directory(tree, dest)

        assert (dest / "link.txt").is_symlink()
        assert os.readlink(dest / "link.txt") == "top.txt"

    def test_merges_into_existing_dest(self, mover, tree, tmp_path):
        dest = tmp_path / "dest"
        dest.mkdir()
        (dest / "keep.txt").write_text("keep")
        (dest / "top.txt").write_text("old")

        mover.copy_directory(tree, dest)

        assert (dest / "keep.txt").read_text() == "keep"
        assert (dest / "top.txt").read_text() == "top"


class TestMove:
    def test_renames(self, mover, tree, tmp_path):
        dest = tmp_path / "moved"

        mover.move(tree, dest)

        assert not tree.exists()
        assert (dest / "nested" / "deep.txt").read_text() == "deep"

    def test_cross_device_fallback(self, mover, tree, tmp_path):
        dest = tmp_path / "moved"
        cross_device = OSError(errno.EXDEV, "Invalid cross-device link")

        with patch("buildpack.filestore.directory_mover.os.rename", side_effect=cross_device):
            mover.move(tree, dest)

        assert not tree.exists()
        assert (dest / "top.txt").read_text() == "top"
        assert (dest / "link.txt").is_symlink()

    def test_other_rename_errors_propagate(self, mover, tree, tmp_path):
        with patch("buildpack.filestore.directory_mover.os.rename", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                mover.move(tree, tmp_path / "moved")

        assert tree.exists()


class TestRemoveAll:
    def test_removes_tree(self, mover, tree):
        mover.remove_all(tree)
        assert not tree.exists()

    def test_removes_file(self, mover, tmp_path):
        path = tmp_path / "file"
        path.write_text("x")
        mover.remove_all(path)
        assert not path.exists()

    def test_removes_symlink_not_target(self, mover, tree, tmp_path):
        link = tmp_path / "dirlink"
        os.symlink(tree, link)

        mover.remove_all(link)

        assert not link.exists()
        assert (tree / "top.txt").exists()

    def test_missing_is_not_an_error(self, mover, tmp_path):
        mover.remove_all(tmp_path / "missing")


class TestText:
    def test_write_then_read(self, mover, tmp_path):
        path = tmp_path / "signature"
        mover.write_text(path, "1; 2; 3\n")
        assert mover.read_text(path) == "1; 2; 3\n"

    def test_read_missing_raises_not_found(self, mover, tmp_path):
        with pytest.raises(FileNotFoundError):
            mover.read_text(tmp_path / "missing")

    def test_make_dirs(self, mover, tmp_path):
        path = tmp_path / "a" / "b" / "c"
        mover.make_dirs(path)
        mover.make_dirs(path)
        assert path.is_dir()
