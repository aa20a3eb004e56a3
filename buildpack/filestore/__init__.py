"""
文件系统操作模块
"""

from .directory_mover import DirectoryMover

__all__ = ["DirectoryMover"]
