"""
Buildpack Logger - 构建输出

面向用户的 staging 输出，格式与 Cloud Foundry buildpack 约定一致：

    -----> Restoring cache
           Loading 3 from cacheDirectories (default):
           - .npm
           **WARNING** yarn.lock is outdated

诊断日志请使用标准库 logging（见 logging_config.setup_logging）。
"""

import sys
from typing import Any, Optional, TextIO


STEP_PREFIX = "-----> "
INDENT = "       "


class BuildpackLogger:
    """
    构建输出记录器

    使用方式：
    ```python
    log = BuildpackLogger()
    log.begin_step("Restoring cache")
    log.info("- %s (exists - skipping)", ".npm")
    ```
    """

    def __init__(self, output: Optional[TextIO] = None):
        """
        Args:
            output: 输出流，默认 sys.stdout
        """
        self._output = output

    @property
    def output(self) -> TextIO:
        # 延迟解析 sys.stdout，以便测试捕获
        return self._output if self._output is not None else sys.stdout

    def set_output(self, output: TextIO) -> None:
        self._output = output

    def begin_step(self, message: str, *args: Any) -> None:
        self._write(STEP_PREFIX, message, args)

    def info(self, message: str, *args: Any) -> None:
        self._write(INDENT, message, args)

    def warning(self, message: str, *args: Any) -> None:
        self._write(INDENT + "**WARNING** ", message, args)

    def error(self, message: str, *args: Any) -> None:
        self._write(INDENT + "**ERROR** ", message, args)

    def protip(self, tip: str, help_url: str) -> None:
        """输出带文档链接的提示"""
        self._write(INDENT, "PRO TIP: %s", (tip,))
        self._write(INDENT, "Visit %s", (help_url,))

    def _write(self, prefix: str, message: str, args: tuple) -> None:
        text = message % args if args else message
        self.output.write(f"{prefix}{text}\n")
        self.output.flush()


__all__ = ["BuildpackLogger", "STEP_PREFIX", "INDENT"]
