"""
package.json 模型

只解析 Buildpack 关心的字段，其余字段忽略。
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from buildpack.errors import ManifestError

logger = logging.getLogger(__name__)


class PackageJSON(BaseModel):
    """应用清单 package.json"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    cache_directories_camel: Optional[List[str]] = Field(
        default=None,
        alias="cacheDirectories",
        description="缓存目录列表（首选键名）"
    )
    cache_directories: Optional[List[str]] = Field(
        default=None,
        description="缓存目录列表（备用键名）"
    )

    @property
    def cache_dirs(self) -> List[str]:
        """
        有效的缓存目录列表

        cacheDirectories 非空时优先，否则使用 cache_directories，都为空时返回 []
        """
        if self.cache_directories_camel:
            return list(self.cache_directories_camel)
        if self.cache_directories:
            return list(self.cache_directories)
        return []

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PackageJSON":
        """
        从文件加载 package.json

        Args:
            path: package.json 路径

        Returns:
            PackageJSON 对象；文件不存在时返回空对象

        Raises:
            ManifestError: JSON 格式错误或字段类型不符
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug("No package.json at %s", path)
            return cls()
        except json.JSONDecodeError as e:
            raise ManifestError(f"Unable to parse {path.name}: {e}", details={"path": str(path)}) from e

        if not isinstance(data, dict):
            raise ManifestError(f"{path.name} must contain a JSON object", details={"path": str(path)})

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ManifestError(f"Invalid {path.name}: {e}", details={"path": str(path)}) from e


def find_cache_dirs(build_dir: Union[str, Path]) -> List[str]:
    """读取 <build_dir>/package.json 中声明的缓存目录"""
    return PackageJSON.load(Path(build_dir) / "package.json").cache_dirs


__all__ = ["PackageJSON", "find_cache_dirs"]
