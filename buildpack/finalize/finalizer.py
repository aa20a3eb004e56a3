"""
Finalize stage.

Sequence for one application build:

1. warn about a missing package.json, suggest vendoring, list node config
2. read cacheDirectories from package.json
3. probe tool versions (CacheManager construction)
4. restore the build cache
5. install dependencies with yarn or npm
6. save the build cache

Failures in steps 3-6 are logged and re-raised as the stage's FinalizeError
subclass so callers can tell which stage broke.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Mapping, Optional, TypeVar, Union

from buildpack.cache import CacheManager
from buildpack.command import CommandRunner
from buildpack.errors import (
    BuildpackError,
    FinalizeError,
    InstallError,
    ProbeError,
    RestoreError,
    SaveError,
)
from buildpack.filestore import DirectoryMover
from buildpack.logging import BuildpackLogger
from buildpack.models import find_cache_dirs
from buildpack.package_managers import NPM, Yarn
from config import Config

logger = logging.getLogger(__name__)

T = TypeVar("T")

VENDORING_DOCS_URL = "http://docs.cloudfoundry.org/buildpacks/node/index.html#vendoring"
NPM_PRODUCTION_DOCS_URL = "https://docs.npmjs.com/misc/config#production"
NODE_CONFIG_PREFIXES = ("NPM_CONFIG_", "YARN_", "NODE_")


class Finalizer:
    """Runs the finalize stage against one build directory."""

    def __init__(
        self,
        build_dir: Union[str, Path],
        cache_dir: Union[str, Path],
        command: CommandRunner,
        log: BuildpackLogger,
        config: Optional[Config] = None,
        environ: Optional[Mapping[str, str]] = None,
        mover: Optional[DirectoryMover] = None,
    ):
        self.build_dir = Path(build_dir)
        self.cache_dir = Path(cache_dir)
        self.command = command
        self.log = log
        self.config = config if config is not None else Config()
        self.environ = environ if environ is not None else os.environ
        self.mover = mover if mover is not None else DirectoryMover()

    def run(self) -> None:
        """
        Run the whole stage.

        Raises:
            ManifestError: package.json could not be parsed
            ProbeError / RestoreError / InstallError / SaveError
        """
        self.warn_missing_package_json()
        self.tip_vendor_dependencies()
        self.list_node_config(self.environ)

        try:
            cache_dirs = find_cache_dirs(self.build_dir)
        except BuildpackError as e:
            self.log.error("Unable to load package.json: %s", e)
            raise

        cache = self._run_stage(
            ProbeError,
            "Unable to determine tool versions",
            lambda: CacheManager(
                self.build_dir,
                self.cache_dir,
                self.command,
                self.log,
                cache_dirs=cache_dirs,
                config=self.config.cache,
                tools=self.config.tools,
                mover=self.mover,
            ),
        )

        self._run_stage(RestoreError, "Unable to restore cache", cache.restore)
        self._run_stage(InstallError, "Unable to build dependencies", self.build_dependencies)
        self._run_stage(SaveError, "Unable to save cache", cache.save)

    def build_dependencies(self) -> None:
        """yarn when yarn.lock exists, else npm (rebuild when node_modules is vendored)"""
        if (self.build_dir / "yarn.lock").exists():
            Yarn(self.build_dir, self.command, self.log, environ=self.environ).build()
            return

        npm = NPM(self.build_dir, self.command, self.log, environ=self.environ)
        if not (self.build_dir / "package.json").exists():
            self.log.info("Skipping npm install (no package.json)")
        elif (self.build_dir / "node_modules").exists():
            npm.rebuild()
        else:
            npm.build()

    def warn_missing_package_json(self) -> None:
        if not (self.build_dir / "package.json").exists():
            self.log.warning("No package.json found")

    def tip_vendor_dependencies(self) -> None:
        """Suggest vendoring when node_modules is absent or holds no packages."""
        node_modules = self.build_dir / "node_modules"
        if node_modules.is_dir() and any(p.is_dir() for p in node_modules.iterdir()):
            return

        self.log.protip(
            "It is recommended to vendor the application's Node.js dependencies",
            VENDORING_DOCS_URL,
        )

    def list_node_config(self, environ: Mapping[str, str]) -> None:
        """Echo node-related env vars so build logs show the effective config."""
        for key in sorted(environ):
            if key.startswith(NODE_CONFIG_PREFIXES):
                self.log.info("%s=%s", key, environ[key])

        node_env = environ.get("NODE_ENV")
        production = environ.get("NPM_CONFIG_PRODUCTION", "").lower() == "true"
        if production and node_env is not None and node_env != "production":
            self.log.warning("npm scripts will see NODE_ENV=production (not '%s')", node_env)
            self.log.info(NPM_PRODUCTION_DOCS_URL)

    def _run_stage(self, error_cls: type, message: str, func: Callable[[], T]) -> T:
        try:
            return func()
        except FinalizeError:
            raise
        except (BuildpackError, OSError) as e:
            logger.debug("%s stage failed", error_cls.stage, exc_info=True)
            self.log.error("%s: %s", message, e)
            raise error_cls(f"{message}: {e}") from e


__all__ = ["Finalizer"]
