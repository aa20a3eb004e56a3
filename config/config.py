"""
配置管理系统

支持从 YAML 文件、.env 文件和环境变量加载 Buildpack 配置
"""

import os
import yaml
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv


# 传统开关：NODE_MODULES_CACHE=false 时禁用缓存恢复与保存
NODE_MODULES_CACHE_ENV = "NODE_MODULES_CACHE"

# 结构化环境变量前缀，例如 BP_CACHE__ENABLED=false
ENV_PREFIX = "BP_"


class CacheConfig(BaseModel):
    """构建缓存配置"""

    enabled: bool = Field(default=True, description="是否启用构建缓存（恢复与保存）")


class ToolsConfig(BaseModel):
    """工具二进制名称，用于版本探测和缓存签名"""

    node: str = Field(default="node", description="Node.js 运行时")
    npm: str = Field(default="npm", description="主包管理器")
    yarn: str = Field(default="yarn", description="次包管理器")


class CommandConfig(BaseModel):
    """外部命令执行配置"""

    timeout: Optional[int] = Field(
        default=None,
        ge=1,
        description="命令超时时间（秒），None 表示不限制"
    )


class LoggingConfig(BaseModel):
    """诊断日志配置（与构建输出分离）"""

    level: str = Field(default="WARNING", description="日志级别")
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        description="日志格式"
    )
    file: Optional[str] = Field(default=None, description="日志文件路径，None 表示只输出到控制台")
    max_bytes: int = Field(default=10485760, description="日志文件最大大小（10MB）")
    backup_count: int = Field(default=5, description="日志备份数量")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """验证日志级别"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


class Config(BaseModel):
    """Buildpack 总配置"""

    # 环境配置
    environment: str = Field(default="production", description="运行环境 (development, production, test)")
    debug: bool = Field(default=False, description="调试模式")

    # 各模块配置
    cache: CacheConfig = Field(default_factory=CacheConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    command: CommandConfig = Field(default_factory=CommandConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """验证环境变量"""
        valid_envs = ["development", "production", "test"]
        if v not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v


class ConfigManager:
    """
    配置管理器

    加载顺序（后者覆盖前者）：
    1. YAML 配置文件
    2. BP_ 前缀环境变量
    3. NODE_MODULES_CACHE 传统开关
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        初始化配置管理器

        Args:
            config_path: YAML 配置文件路径，默认自动查找
        """
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[Config] = None

    @staticmethod
    def _find_config_file() -> str:
        """
        查找配置文件

        按以下顺序查找：
        1. ./config/settings.yaml
        2. ./settings.yaml
        3. ~/.config/nodejs_buildpack/settings.yaml
        """
        possible_paths = [
            "./config/settings.yaml",
            "./settings.yaml",
            os.path.expanduser("~/.config/nodejs_buildpack/settings.yaml"),
        ]

        for path in possible_paths:
            if os.path.exists(path):
                return path

        # 如果都没找到，使用默认路径
        return "./config/settings.yaml"

    def load_yaml(self) -> Dict[str, Any]:
        """
        从 YAML 文件加载配置

        Returns:
            配置字典，文件不存在时为空字典
        """
        if not os.path.exists(self.config_path):
            return {}

        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _override_from_env(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        从环境变量覆盖配置

        使用 __ 分隔层级，例如：
        BP_CACHE__ENABLED=false
        BP_TOOLS__YARN=/opt/yarn/bin/yarn

        Args:
            config_dict: 原始配置字典

        Returns:
            覆盖后的配置字典
        """
        result = config_dict.copy()

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            # 移除前缀，将 __ 替换为 .
            key = env_key[len(ENV_PREFIX):].replace("__", ".").lower()
            parts = key.split(".")

            # 设置嵌套值
            current = result
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            current[parts[-1]] = self._parse_env_value(env_value)

        return result

    @staticmethod
    def _override_from_legacy_env(config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        应用 NODE_MODULES_CACHE 开关

        仅当值恰好为 "false" 时禁用缓存
        """
        value = os.environ.get(NODE_MODULES_CACHE_ENV)
        if value == "false":
            cache = config_dict.get("cache")
            if not isinstance(cache, dict):
                cache = {}
            config_dict["cache"] = {**cache, "enabled": False}
        return config_dict

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """
        解析环境变量值

        Args:
            value: 环境变量值

        Returns:
            解析后的值
        """
        # 尝试解析为布尔值
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        # 尝试解析为数字
        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        # 返回字符串
        return value

    def load(self) -> Config:
        """
        加载配置

        Returns:
            配置对象
        """
        if self._config is not None:
            return self._config

        # 加载 .env 文件（不覆盖已有环境变量）
        load_dotenv(override=False)

        yaml_config = self.load_yaml()
        merged_config = self._override_from_env(yaml_config)
        merged_config = self._override_from_legacy_env(merged_config)

        self._config = Config(**merged_config)
        return self._config
