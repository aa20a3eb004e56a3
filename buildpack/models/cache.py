"""
构建缓存模型
"""

from pydantic import BaseModel, Field


class ToolVersions(BaseModel):
    """构建时探测到的工具版本，决定缓存签名"""

    node: str = Field(..., description="Node.js 版本")
    npm: str = Field(..., description="npm 版本")
    yarn: str = Field(..., description="yarn 版本")

    def signature(self) -> str:
        """缓存签名：三个版本以 '; ' 连接"""
        return f"{self.node}; {self.npm}; {self.yarn}"


__all__ = ["ToolVersions"]
