"""
Build cache.

- CacheManager: signature-gated restore/save of dependency directories
- find_version: probe a tool's ``--version`` output
"""

from buildpack.cache.cache_manager import (
    CacheManager,
    DEFAULT_CACHE_DIRS,
    TRANSIENT_DIRS,
    find_version,
)

__all__ = [
    "CacheManager",
    "DEFAULT_CACHE_DIRS",
    "TRANSIENT_DIRS",
    "find_version",
]
