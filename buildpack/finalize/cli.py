"""
Buildpack finalize CLI

用法: buildpack-finalize BUILD_DIR CACHE_DIR [--config PATH]

退出码区分失败阶段：
  10 配置加载失败
  11 package.json 解析失败
  12 工具版本探测失败
  13 缓存恢复失败
  14 依赖安装失败
  15 缓存保存失败
"""

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from buildpack import __version__
from buildpack.command import SubprocessCommandRunner
from buildpack.errors import FinalizeError, ManifestError
from buildpack.finalize.finalizer import Finalizer
from buildpack.logging import BuildpackLogger, setup_logging
from config import ConfigManager

EXIT_CONFIG = 10
EXIT_MANIFEST = 11


@click.command()
@click.version_option(version=__version__)
@click.argument("build_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("cache_dir", type=click.Path(file_okay=False))
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None, help="YAML 配置文件路径")
def finalize(build_dir: str, cache_dir: str, config_path: Optional[str]):
    """Finalize a Node.js application build

    恢复构建缓存、安装依赖、保存构建缓存
    """
    log = BuildpackLogger()

    try:
        config = ConfigManager(config_path).load()
    except (ValidationError, yaml.YAMLError, OSError) as e:
        log.error("Unable to load configuration: %s", e)
        sys.exit(EXIT_CONFIG)

    setup_logging(config.logging)
    Path(cache_dir).mkdir(parents=True, exist_ok=True)

    finalizer = Finalizer(
        build_dir,
        cache_dir,
        SubprocessCommandRunner(timeout=config.command.timeout),
        log,
        config=config,
    )

    try:
        finalizer.run()
    except FinalizeError as e:
        sys.exit(e.exit_code)
    except ManifestError:
        sys.exit(EXIT_MANIFEST)


def main():
    """CLI 入口"""
    finalize()


if __name__ == "__main__":
    main()
