"""
配置管理模块

导出配置相关的类和函数
"""

from .config import (
    Config,
    ConfigManager,
    CacheConfig,
    ToolsConfig,
    CommandConfig,
    LoggingConfig,
    NODE_MODULES_CACHE_ENV,
)

__all__ = [
    "Config",
    "ConfigManager",
    "CacheConfig",
    "ToolsConfig",
    "CommandConfig",
    "LoggingConfig",
    "NODE_MODULES_CACHE_ENV",
]
