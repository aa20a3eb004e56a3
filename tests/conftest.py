"""
Pytest 配置文件

设置测试环境，提供共享夹具
"""

import io
import logging
import os
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    """
    Pytest 配置钩子

    在测试收集之前设置 Python 路径
    """
    # 添加项目根目录到 Python 路径（必须放在最前面，避免与已安装的同名包冲突）
    project_root = Path(__file__).parent.parent.resolve()
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


# 向后兼容：也直接设置路径（pytest_configure 会更早执行）
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


from buildpack.command import CommandRunner  # noqa: E402
from buildpack.logging import BuildpackLogger  # noqa: E402


class FakeCommandRunner(CommandRunner):
    """
    记录调用的命令执行器

    - versions: program -> `--version` 输出
    - failures: (program, *args) -> 要抛出的异常
    - calls / streams / environs: 每次调用的参数、输出流和环境变量快照
    """

    def __init__(self, versions=None, failures=None):
        self.versions = versions if versions is not None else {
            "node": "1.1.1\n",
            "npm": "2.2.2\n",
            "yarn": "3.3.3\n",
        }
        self.failures = failures if failures is not None else {}
        self.calls = []
        self.streams = []
        self.environs = []

    def execute(self, dir, stdout, stderr, program, *args):
        self.calls.append((dir, program, args))
        self.streams.append((stdout, stderr))
        self.environs.append(dict(os.environ))

        key = (program, *args)
        if key in self.failures:
            raise self.failures[key]

        if args == ("--version",) and program in self.versions and stdout is not None:
            stdout.write(self.versions[program])

    def calls_for(self, program):
        return [call for call in self.calls if call[1] == program]


@pytest.fixture
def command_runner():
    """默认返回 1.1.1 / 2.2.2 / 3.3.3 的假命令执行器"""
    return FakeCommandRunner()


@pytest.fixture
def make_runner():
    """构造带自定义版本或失败的假命令执行器"""
    return FakeCommandRunner


@pytest.fixture
def log_output():
    """构建输出缓冲区"""
    return io.StringIO()


@pytest.fixture
def log(log_output):
    """写入缓冲区的 BuildpackLogger"""
    return BuildpackLogger(log_output)


@pytest.fixture
def build_dir(tmp_path):
    """构建目录"""
    path = tmp_path / "build"
    path.mkdir()
    return path


@pytest.fixture
def cache_dir(tmp_path):
    """缓存目录"""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def reset_buildpack_logger():
    """还原 setup_logging 修改过的 buildpack 日志记录器"""
    yield
    pkg_logger = logging.getLogger("buildpack")
    for handler in list(pkg_logger.handlers):
        handler.close()
        pkg_logger.removeHandler(handler)
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True
