"""
npm invoker.
"""

from buildpack.package_managers.base import PackageManager


class NPM(PackageManager):
    """npm install / npm rebuild"""

    name = "npm"

    def _install_args(self) -> list:
        return [
            "install",
            "--unsafe-perm",
            "--userconfig",
            str(self.build_dir / ".npmrc"),
            "--cache",
            str(self.build_dir / ".npm"),
        ]

    def build(self) -> None:
        self.log.info("Installing node modules (package.json)")
        self._run(*self._install_args())

    def rebuild(self) -> None:
        """Rebuild vendored native modules, then install anything missing."""
        self.log.info("Rebuilding any native modules")
        self._run("rebuild", f"--nodedir={self.node_home}")

        self.log.info("Installing any new modules (package.json)")
        self._run(*self._install_args())


__all__ = ["NPM"]
