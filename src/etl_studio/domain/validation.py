"""
输入验证层

在数据进入存储层之前拒绝结构不合法的请求体：
- 每种实体只接受声明过的字段，未知字段被丢弃
- 服务端分配的字段（id、createdAt、updatedAt、lastTested）不接受调用方提交
- 校验失败时一次性列出所有不合法字段，而不仅是第一个
- 只做结构/类型/枚举校验，不做跨字段或跨实体的业务规则校验
"""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from etl_studio.domain.connectors.models import (
    ConnectorCreate,
    ConnectorUpdate,
    get_config_schema,
)
from etl_studio.domain.pipeline.models import (
    JobCreate,
    JobUpdate,
    PipelineCreate,
    PipelineUpdate,
    ScheduleCreate,
    ScheduleUpdate,
)
from etl_studio.domain.users.models import UserCreate
from etl_studio.framework.shared.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_errors(
    exc: PydanticValidationError, prefix: tuple[Any, ...] = ()
) -> list[dict[str, Any]]:
    """将 pydantic 错误转换为 {path, message, code} 列表"""
    return [
        {
            "path": [*prefix, *error["loc"]],
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]


def _parse(schema: type[ModelT], payload: Any) -> tuple[ModelT | None, list[dict[str, Any]]]:
    try:
        return schema.model_validate(payload), []
    except PydanticValidationError as exc:
        return None, format_errors(exc)


def validate_payload(schema: type[ModelT], payload: Any, *, entity: str) -> ModelT:
    """
    按输入模型校验请求体

    Args:
        schema: 输入模型（*Create / *Update）
        payload: 已解析的 JSON 请求体
        entity: 实体名称，用于错误消息

    Raises:
        ValidationError: 列出全部不合法字段
    """
    parsed, errors = _parse(schema, payload)
    if errors:
        raise ValidationError(f"Invalid {entity} data", errors)
    return parsed


def check_connector_configuration(
    connector_type: str, configuration: dict[str, Any]
) -> list[dict[str, Any]]:
    """按连接器类型检查 configuration 形状，未知类型不做约束"""
    schema = get_config_schema(connector_type)
    if schema is None:
        return []
    try:
        schema.model_validate(configuration)
    except PydanticValidationError as exc:
        return format_errors(exc, prefix=("configuration",))
    return []


def validate_user_create(payload: Any) -> UserCreate:
    return validate_payload(UserCreate, payload, entity="user")


def validate_pipeline_create(payload: Any) -> PipelineCreate:
    return validate_payload(PipelineCreate, payload, entity="pipeline")


def validate_pipeline_update(payload: Any) -> PipelineUpdate:
    return validate_payload(PipelineUpdate, payload, entity="pipeline")


def validate_connector_create(payload: Any) -> ConnectorCreate:
    """校验连接器创建输入，同时检查与 type 对应的 configuration 形状"""
    parsed, errors = _parse(ConnectorCreate, payload)

    if isinstance(payload, dict):
        connector_type = payload.get("type")
        configuration = payload.get("configuration")
        if isinstance(connector_type, str) and isinstance(configuration, dict):
            errors.extend(check_connector_configuration(connector_type, configuration))

    if errors:
        raise ValidationError("Invalid connector data", errors)
    return parsed


def validate_connector_update(
    payload: Any,
    current_type: str,
    current_configuration: dict[str, Any] | None = None,
) -> ConnectorUpdate:
    """
    校验连接器部分更新

    合并后的 configuration 按合并后的 type 检查：
    未提交 type 时沿用 current_type，未提交 configuration 时沿用 current_configuration。
    两者都未提交时不做形状检查。
    """
    parsed = validate_payload(ConnectorUpdate, payload, entity="connector")

    if parsed.configuration is None and parsed.type is None:
        return parsed

    configuration = (
        parsed.configuration if parsed.configuration is not None else current_configuration
    )
    errors = check_connector_configuration(parsed.type or current_type, configuration or {})
    if errors:
        raise ValidationError("Invalid connector data", errors)
    return parsed


def validate_job_create(payload: Any) -> JobCreate:
    return validate_payload(JobCreate, payload, entity="job")


def validate_job_update(payload: Any) -> JobUpdate:
    return validate_payload(JobUpdate, payload, entity="job")


def validate_schedule_create(payload: Any) -> ScheduleCreate:
    return validate_payload(ScheduleCreate, payload, entity="schedule")


def validate_schedule_update(payload: Any) -> ScheduleUpdate:
    return validate_payload(ScheduleUpdate, payload, entity="schedule")
