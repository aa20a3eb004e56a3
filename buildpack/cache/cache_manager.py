"""
Build Cache Manager.

Carries dependency directories (package-manager caches, bower components,
anything the app lists under ``cacheDirectories``) from one build to the next.

Layout under the persistent cache root::

    <cache_dir>/node/signature      "<node>; <npm>; <yarn>\\n"
    <cache_dir>/node/<relative-dir> cached copy of <build_dir>/<relative-dir>

Restore *moves* cached directories into the build directory, and only when
the stored signature matches the current tool versions. Save *copies* the
build directory's copies back out after wiping the previous cache.
"""

import io
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from buildpack.command import CommandRunner
from buildpack.filestore import DirectoryMover
from buildpack.logging import BuildpackLogger
from buildpack.models import ToolVersions
from config import CacheConfig, ToolsConfig

logger = logging.getLogger(__name__)

# Used when package.json declares no cache directories
DEFAULT_CACHE_DIRS = [".npm", ".cache/yarn", "bower_components"]

# Package-manager caches that must not ship in the droplet
TRANSIENT_DIRS = [".npm", ".cache/yarn"]

SIGNATURE_FILE = "signature"


def find_version(command: CommandRunner, binary: str) -> str:
    """
    Run ``<binary> --version`` and return its trimmed stdout.

    Raises:
        CommandError: the binary could not be started
        CommandExitError: the binary exited non-zero
    """
    buffer = io.StringIO()
    command.execute("", buffer, None, binary, "--version")
    return buffer.getvalue().strip()


class CacheManager:
    """
    Signature-gated restore/save of the build cache.

    One instance per build. Tool versions are probed once, at construction;
    a probe failure propagates and no manager is created.
    """

    def __init__(
        self,
        build_dir: Union[str, Path],
        cache_dir: Union[str, Path],
        command: CommandRunner,
        log: BuildpackLogger,
        cache_dirs: Optional[Sequence[str]] = None,
        config: Optional[CacheConfig] = None,
        tools: Optional[ToolsConfig] = None,
        mover: Optional[DirectoryMover] = None,
    ):
        """
        Args:
            build_dir: Application workspace being built
            cache_dir: Persistent cache root (entries live under ``node/``)
            command: Runner used to probe tool versions
            log: Staging output
            cache_dirs: Directories declared by package.json; empty means defaults
            config: Cache settings used when restore/save get none
            tools: Binary names to probe
            mover: Filesystem operations
        """
        self.build_dir = Path(build_dir)
        self.cache_dir = Path(cache_dir)
        self.command = command
        self.log = log
        self.cache_dirs: List[str] = list(cache_dirs or [])
        self.config = config if config is not None else CacheConfig()
        self.mover = mover if mover is not None else DirectoryMover()

        tools = tools if tools is not None else ToolsConfig()
        self.versions = ToolVersions(
            node=find_version(command, tools.node),
            npm=find_version(command, tools.npm),
            yarn=find_version(command, tools.yarn),
        )
        logger.debug("Cache signature: %s", self.signature())

    @property
    def node_cache_dir(self) -> Path:
        return self.cache_dir / "node"

    @property
    def signature_path(self) -> Path:
        return self.node_cache_dir / SIGNATURE_FILE

    def signature(self) -> str:
        return self.versions.signature()

    def select_cache_dirs(self) -> Tuple[str, List[str]]:
        """
        Pick the directory set shared by restore and save.

        Returns:
            ``("package.json", cache_dirs)`` when package.json declared any,
            otherwise ``("default", DEFAULT_CACHE_DIRS)``
        """
        if self.cache_dirs:
            return "package.json", list(self.cache_dirs)

        return "default", list(DEFAULT_CACHE_DIRS)

    def restore(self, config: Optional[CacheConfig] = None) -> None:
        """
        Move cached directories into the build directory.

        Skips entirely (without error) when there is no previous cache, when
        the signature changed, or when the cache is disabled. Directories that
        already exist in the build directory are left alone and their cached
        copy is not consumed.

        Raises:
            OSError: reading the signature (other than not-found) or moving a directory failed
        """
        config = config if config is not None else self.config
        self.log.begin_step("Restoring cache")

        try:
            previous = self.mover.read_text(self.signature_path)
        except FileNotFoundError:
            self.log.info("Skipping cache restore (no previous cache)")
            return

        if previous.strip() != self.signature():
            logger.debug("Stored signature %r != %r", previous.strip(), self.signature())
            self.log.info("Skipping cache restore (new runtime signature)")
            return

        if not config.enabled:
            self.log.info("Skipping cache restore (disabled by config)")
            return

        source, dirs_to_restore = self.select_cache_dirs()
        self.log.info("Loading %d from cacheDirectories (%s):", len(dirs_to_restore), source)

        for dir_name in dirs_to_restore:
            self._restore_dir(dir_name)

    def save(self, config: Optional[CacheConfig] = None) -> None:
        """
        Replace the cache with the build directory's copies.

        The whole ``<cache_dir>/node`` tree is wiped first and the signature is
        always rewritten, even when the cache is disabled. Afterwards the
        package-manager caches are removed from the build directory.

        Raises:
            OSError: any filesystem step failed; nothing is rolled back
        """
        config = config if config is not None else self.config
        self.log.begin_step("Caching build")
        self.log.info("Clearing previous node cache")

        self.mover.remove_all(self.node_cache_dir)
        self.mover.make_dirs(self.node_cache_dir)
        self.mover.write_text(self.signature_path, self.signature() + "\n")

        if not config.enabled:
            self.log.info("Skipping cache save (disabled by config)")
            return

        source, dirs_to_save = self.select_cache_dirs()
        self.log.info("Saving %d cacheDirectories (%s):", len(dirs_to_save), source)

        for dir_name in dirs_to_save:
            self._save_dir(dir_name)

        for dir_name in TRANSIENT_DIRS:
            self.mover.remove_all(self.build_dir / dir_name)

    def _entry_paths(self, dir_name: str) -> Tuple[Path, Path]:
        """
        Build-dir and cache-dir locations of one cache entry.

        Absolute entries are anchored under both roots instead of replacing them.
        """
        relative = dir_name.lstrip("/\\")
        return self.build_dir / relative, self.node_cache_dir / relative

    def _restore_dir(self, dir_name: str) -> None:
        dest, source = self._entry_paths(dir_name)

        if self.mover.exists(dest):
            self.log.info("- %s (exists - skipping)", dir_name)
        elif not self.mover.exists(source):
            self.log.info("- %s (not cached - skipping)", dir_name)
        else:
            self.log.info("- %s", dir_name)
            self.mover.make_dirs(dest.parent)
            self.mover.move(source, dest)

    def _save_dir(self, dir_name: str) -> None:
        source, dest = self._entry_paths(dir_name)

        if not self.mover.exists(source):
            self.log.info("- %s (nothing to cache)", dir_name)
            return

        self.log.info("- %s", dir_name)
        self.mover.make_dirs(dest.parent)
        self.mover.copy_directory(source, dest)


__all__ = [
    "CacheManager",
    "DEFAULT_CACHE_DIRS",
    "TRANSIENT_DIRS",
    "find_version",
]
