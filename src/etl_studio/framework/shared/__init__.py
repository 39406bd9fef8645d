"""
shared/ - 共享工具

提供跨层共享的组件：
- 配置管理
- 异常定义
- 日志配置
"""

from .config import Settings, get_settings
from .exceptions import (
    ConfigurationError,
    ConflictError,
    EtlStudioError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "Settings", "get_settings",
    "EtlStudioError", "ValidationError", "ConfigurationError",
    "NotFoundError", "ConflictError",
]
