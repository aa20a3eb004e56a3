"""
数据模型
"""

from .cache import ToolVersions
from .package_json import PackageJSON, find_cache_dirs

__all__ = [
    "ToolVersions",
    "PackageJSON",
    "find_cache_dirs",
]
