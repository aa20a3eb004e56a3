"""
日志配置模块

为 Buildpack 诊断日志提供统一配置，支持控制台和轮转文件输出。
构建输出（BuildpackLogger）写入 stdout，诊断日志写入 stderr，互不干扰。
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from config import LoggingConfig


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    设置诊断日志配置

    Args:
        config: 日志配置，默认使用 LoggingConfig()

    Returns:
        buildpack 包的根日志记录器
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level.upper())

    pkg_logger = logging.getLogger("buildpack")
    pkg_logger.setLevel(level)
    pkg_logger.propagate = False

    # 清除现有的处理器
    pkg_logger.handlers.clear()

    log_format = logging.Formatter(fmt=config.format, datefmt="%Y-%m-%d %H:%M:%S")

    # 控制台处理器
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(log_format)
    pkg_logger.addHandler(console_handler)

    # 文件处理器 (轮转)
    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(log_format)
        pkg_logger.addHandler(file_handler)

    pkg_logger.debug("日志系统初始化完成: level=%s, file=%s", config.level, config.file)
    return pkg_logger


__all__ = ["setup_logging"]
