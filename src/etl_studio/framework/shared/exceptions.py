"""
共享异常定义

定义项目中使用的自定义异常，由 API 层统一转换为 HTTP 响应。
"""

from typing import Any


class EtlStudioError(Exception):
    """ETL Studio 基础异常"""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None
    ):
        self.message = message
        self.error_code = error_code or "ETL_STUDIO_ERROR"
        self.details = details or {}
        self.cause = cause

        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典格式"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None
        }


class ConfigurationError(EtlStudioError):
    """配置错误"""
    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, "CONFIG_ERROR", details)


class NotFoundError(EtlStudioError):
    """资源不存在"""
    def __init__(
        self, message: str, resource: str | None = None, resource_id: int | None = None
    ):
        details = {"resource": resource, "resource_id": resource_id} if resource else {}
        super().__init__(message, "NOT_FOUND", details)


class ValidationError(EtlStudioError):
    """
    验证错误

    errors 中每一项对应一个不合法的字段：
    {"path": [...], "message": str, "code": str}
    """
    def __init__(
        self, message: str, errors: list[dict[str, Any]] | None = None
    ):
        self.errors = errors or []
        super().__init__(message, "VALIDATION_ERROR", {"errors": self.errors})

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["errors"] = self.errors
        return payload


class ConflictError(EtlStudioError):
    """唯一键冲突"""
    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {"field": field, "value": value} if field else {}
        super().__init__(message, "CONFLICT", details)
