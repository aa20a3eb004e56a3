"""
Node.js Buildpack

Finalize stage of a Node.js buildpack with a signature-gated build cache.

Components:
- CacheManager: restore/save dependency directories between builds
- Finalizer: cache restore → npm/yarn install → cache save
- SubprocessCommandRunner: runs node / npm / yarn
- BuildpackLogger: staging output
"""

__version__ = "1.0.0"
