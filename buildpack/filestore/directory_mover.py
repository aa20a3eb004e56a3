"""
Directory Mover for the build cache.

Thin filesystem layer used by the cache manager to shuttle directory trees
between the build directory and the cache directory.
"""

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DirectoryMover:
    """
    Recursive directory operations.

    All methods raise the underlying OSError on failure, except where a
    missing path is an expected condition (``exists``, ``remove_all``).
    """

    def exists(self, path: PathLike) -> bool:
        """Return False only when the path does not exist; other stat errors propagate."""
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        return True

    def make_dirs(self, path: PathLike) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def copy_directory(self, source: PathLike, dest: PathLike) -> None:
        """
        Copy the contents of ``source`` into ``dest``.

        ``dest`` may already exist; its contents are merged and overwritten
        file by file. Symlinks are copied as symlinks.
        """
        logger.debug("Copying %s -> %s", source, dest)
        shutil.copytree(source, dest, symlinks=True, dirs_exist_ok=True)

    def move(self, source: PathLike, dest: PathLike) -> None:
        """
        Rename ``source`` to ``dest``.

        Falls back to copy-then-delete when the two paths live on different
        filesystems. ``dest`` must not exist.
        """
        logger.debug("Moving %s -> %s", source, dest)
        try:
            os.rename(source, dest)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            shutil.copytree(source, dest, symlinks=True)
            self.remove_all(source)

    def remove_all(self, path: PathLike) -> None:
        """Remove a file or directory tree. A missing path is not an error."""
        path = Path(path)
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            logger.debug("Removing %s", path)
            shutil.rmtree(path)

    def read_text(self, path: PathLike) -> str:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write_text(self, path: PathLike, content: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)


__all__ = ["DirectoryMover"]
