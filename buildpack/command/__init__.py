"""
命令执行模块
"""

from .runner import CommandRunner, SubprocessCommandRunner

__all__ = [
    "CommandRunner",
    "SubprocessCommandRunner",
]
