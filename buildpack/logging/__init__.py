"""
Buildpack Logging Module

构建输出 (BuildpackLogger) 与诊断日志配置 (setup_logging)
"""

from .buildpack_logger import BuildpackLogger
from .logging_config import setup_logging

__all__ = [
    "BuildpackLogger",
    "setup_logging",
]
