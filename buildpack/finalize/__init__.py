"""
Finalize stage: cache restore → dependency install → cache save
"""

from buildpack.finalize.finalizer import Finalizer

__all__ = ["Finalizer"]
