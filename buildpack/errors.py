"""
错误处理模块

Buildpack 统一异常层级。文件系统错误 (OSError) 不在此包装，直接向上传播。
"""

from typing import Any, Dict, Optional, Sequence


class BuildpackError(Exception):
    """
    Buildpack 异常基类

    携带可读消息和结构化详情。
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


# ===== 命令执行 =====

class CommandError(BuildpackError):
    """命令无法启动或执行超时"""

    def __init__(
        self,
        message: str,
        program: str = "",
        args: Sequence[str] = (),
        details: Optional[Dict[str, Any]] = None
    ):
        self.program = program
        self.args_list = list(args)
        details = dict(details or {})
        details.setdefault("program", program)
        details.setdefault("args", self.args_list)
        super().__init__(message, details)


class CommandExitError(CommandError):
    """命令以非零状态码退出"""

    def __init__(self, program: str, args: Sequence[str], returncode: int):
        self.returncode = returncode
        command_line = " ".join([program, *args])
        super().__init__(
            f"command '{command_line}' exited with status {returncode}",
            program=program,
            args=args,
            details={"returncode": returncode},
        )


# ===== 应用清单 =====

class ManifestError(BuildpackError):
    """package.json 无法解析"""

    pass


# ===== Finalize 阶段 =====

class FinalizeError(BuildpackError):
    """
    Finalize 阶段错误基类

    stage 与 exit_code 用于 CLI 区分失败阶段。
    """

    stage = "finalize"
    exit_code = 1

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        details.setdefault("stage", self.stage)
        super().__init__(message, details)


class ProbeError(FinalizeError):
    """工具版本探测失败"""

    stage = "probe"
    exit_code = 12


class RestoreError(FinalizeError):
    """缓存恢复失败"""

    stage = "restore"
    exit_code = 13


class InstallError(FinalizeError):
    """依赖安装失败"""

    stage = "install"
    exit_code = 14


class SaveError(FinalizeError):
    """缓存保存失败"""

    stage = "save"
    exit_code = 15


__all__ = [
    "BuildpackError",
    "CommandError",
    "CommandExitError",
    "ManifestError",
    "FinalizeError",
    "ProbeError",
    "RestoreError",
    "InstallError",
    "SaveError",
]
