"""
Yarn invoker.

Installs dependencies from yarn.lock, using an offline mirror when the app
ships one in ``npm-packages-offline-cache``.
"""

import io
import sys

from buildpack.errors import CommandExitError
from buildpack.package_managers.base import PackageManager, temporary_env

OFFLINE_MIRROR_DIR = "npm-packages-offline-cache"
OFFLINE_DOCS_URL = "https://yarnpkg.com/blog/2016/11/24/offline-mirror"


class Yarn(PackageManager):
    """yarn install + yarn check"""

    name = "yarn"

    def build(self) -> None:
        self.log.info("Installing node modules (yarn.lock)")

        offline_cache = self.build_dir / OFFLINE_MIRROR_DIR
        install_args = [
            "install",
            "--pure-lockfile",
            "--ignore-engines",
            "--cache-folder",
            str(self.build_dir / ".cache" / "yarn"),
        ]
        check_args = ["check"]

        if offline_cache.exists():
            self.log.info("Found yarn mirror directory %s", offline_cache)
            self._run("config", "set", "yarn-offline-mirror", str(offline_cache))
            self.log.info("Running yarn in offline mode")

            install_args.append("--offline")
            check_args.append("--offline")
        else:
            self.log.info("Running yarn in online mode")
            self.log.info("To run yarn in offline mode, see: %s", OFFLINE_DOCS_URL)

        with temporary_env("npm_config_nodedir", self.node_home):
            self._run(*install_args)

            try:
                self._run(*check_args, stdout=io.StringIO(), stderr=sys.stderr)
            except CommandExitError:
                self.log.warning("yarn.lock is outdated")
            else:
                self.log.info("yarn.lock and package.json match")


__all__ = ["Yarn"]
