"""
命令执行器

以子进程方式执行外部程序（node / npm / yarn），
将输出写入调用方提供的文本流。

失败映射：
- 程序无法启动（不存在、无权限）或超时 → CommandError
- 非零退出码 → CommandExitError
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from buildpack.errors import CommandError, CommandExitError

logger = logging.getLogger(__name__)


class CommandRunner(ABC):
    """命令执行接口"""

    @abstractmethod
    def execute(
        self,
        dir: str,
        stdout: Optional[TextIO],
        stderr: Optional[TextIO],
        program: str,
        *args: str,
    ) -> None:
        """
        执行命令

        Args:
            dir: 工作目录，空字符串表示当前目录
            stdout: 标准输出写入流，None 表示丢弃
            stderr: 标准错误写入流，None 表示丢弃
            program: 程序名
            *args: 程序参数

        Raises:
            CommandError: 程序无法启动或超时
            CommandExitError: 程序以非零状态退出
        """
        pass


class SubprocessCommandRunner(CommandRunner):
    """基于 subprocess 的命令执行器"""

    def __init__(self, timeout: Optional[int] = None):
        """
        Args:
            timeout: 超时时间（秒），None 表示不限制
        """
        self.timeout = timeout

    def execute(
        self,
        dir: str,
        stdout: Optional[TextIO],
        stderr: Optional[TextIO],
        program: str,
        *args: str,
    ) -> None:
        cmd = [program, *args]
        logger.debug("Executing %s (cwd=%s)", cmd, dir or ".")

        try:
            result = subprocess.run(
                cmd,
                cwd=dir or None,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                f"command '{' '.join(cmd)}' timed out after {self.timeout} seconds",
                program=program,
                args=args,
            ) from e
        except OSError as e:
            raise CommandError(
                f"failed to start '{program}': {e}",
                program=program,
                args=args,
            ) from e

        if stdout is not None and result.stdout:
            stdout.write(result.stdout)
        if stderr is not None and result.stderr:
            stderr.write(result.stderr)

        if result.returncode != 0:
            logger.debug("%s exited with status %d", program, result.returncode)
            raise CommandExitError(program, args, result.returncode)


__all__ = ["CommandRunner", "SubprocessCommandRunner"]
