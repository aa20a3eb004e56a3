"""
Shared pieces for package-manager invokers.
"""

import os
import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Optional, TextIO, Union

from buildpack.command import CommandRunner
from buildpack.logging import BuildpackLogger


@contextmanager
def temporary_env(key: str, value: str) -> Iterator[None]:
    """Set an environment variable for the duration of the block."""
    previous = os.environ.get(key)
    os.environ[key] = value
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = previous


class PackageManager(ABC):
    """Runs a package manager inside the build directory."""

    name = ""

    def __init__(
        self,
        build_dir: Union[str, Path],
        command: CommandRunner,
        log: BuildpackLogger,
        output: Optional[TextIO] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.build_dir = Path(build_dir)
        self.command = command
        self.log = log
        self._output = output
        self.environ = environ if environ is not None else os.environ

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    @property
    def node_home(self) -> str:
        return self.environ.get("NODE_HOME", "")

    @abstractmethod
    def build(self) -> None:
        """Install the application's dependencies."""
        pass

    def _run(self, *args: str, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> None:
        self.command.execute(
            str(self.build_dir),
            stdout if stdout is not None else self.output,
            stderr if stderr is not None else self.output,
            self.name,
            *args,
        )


__all__ = ["PackageManager", "temporary_env"]
