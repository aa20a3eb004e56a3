"""
Package-manager invokers (npm, yarn)
"""

from buildpack.package_managers.base import PackageManager, temporary_env
from buildpack.package_managers.npm import NPM
from buildpack.package_managers.yarn import Yarn

__all__ = [
    "PackageManager",
    "NPM",
    "Yarn",
    "temporary_env",
]
