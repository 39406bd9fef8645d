"""
结构化日志配置模块

基于 structlog，为存储层与领域层提供统一的日志解决方案。
支持本地开发和生产环境的不同输出格式。

主要特性:
- 结构化日志输出（JSON/控制台）
- 敏感字段脱敏（如 password）
- 环境自适应格式化

使用方法:
    from etl_studio.framework.shared.logging import get_logger

    logger = get_logger(__name__)
    logger.info("连接器测试完成", connector_id=1, success=True)

环境变量:
    LOG_LEVEL: 日志级别 (DEBUG, INFO, WARNING, ERROR)
    LOG_FORMAT: 日志格式 (json, console)
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor


class EtlStudioLoggingConfig:
    """日志配置类"""

    def __init__(self) -> None:
        self.log_level = self._get_log_level()
        self.log_format = self._get_log_format()
        self.is_production = self._is_production_environment()

    def _get_log_level(self) -> int:
        """获取日志级别"""
        level = os.getenv("LOG_LEVEL", "INFO").upper()
        return getattr(logging, level, logging.INFO)

    def _get_log_format(self) -> str:
        """获取日志格式"""
        return os.getenv("LOG_FORMAT", "console").lower()

    def _is_production_environment(self) -> bool:
        """判断是否为生产环境"""
        return os.getenv("ENVIRONMENT", "development").lower() == "production"


class SensitiveDataFilter:
    """敏感数据过滤器"""

    SENSITIVE_KEYS = {
        'password', 'passwd', 'pwd', 'secret', 'token', 'api_key',
        'connection_string', 'connectionstring',
    }

    def __call__(
        self, logger: logging.Logger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        """过滤敏感数据"""
        for key, value in event_dict.items():
            if key.lower() in self.SENSITIVE_KEYS and value:
                if isinstance(value, str) and len(value) > 4:
                    event_dict[key] = value[:2] + "*" * (len(value) - 2)
                else:
                    event_dict[key] = "***"

        return event_dict


def _get_shared_processors() -> list[Processor]:
    """获取共享处理器链"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        SensitiveDataFilter(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _get_json_processors() -> list[Processor]:
    """获取 JSON 输出处理器链"""
    processors = _get_shared_processors()
    processors.append(structlog.processors.dict_tracebacks)
    processors.append(structlog.processors.JSONRenderer())
    return processors


def _get_console_processors() -> list[Processor]:
    """获取控制台输出处理器链"""
    processors = _get_shared_processors()
    processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return processors


def configure_structlog() -> None:
    """配置 structlog"""
    config = EtlStudioLoggingConfig()

    # 配置标准 logging 模块
    logging.basicConfig(
        level=config.log_level,
        format="%(message)s",  # structlog 会处理格式
        stream=sys.stdout,
    )

    if config.log_format == "json":
        processors = _get_json_processors()
    else:
        processors = _get_console_processors()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
        context_class=dict,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    获取配置好的日志记录器

    Args:
        name: 日志记录器名称，默认为 etl_studio

    Returns:
        structlog.stdlib.BoundLogger: 配置好的日志记录器
    """
    return structlog.get_logger(name or "etl_studio")


def bind_context(**kwargs) -> None:
    """
    绑定上下文信息到当前上下文的所有日志

    Args:
        **kwargs: 要绑定的上下文参数
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """清除当前上下文信息"""
    structlog.contextvars.clear_contextvars()


# 导入时自动配置
configure_structlog()
