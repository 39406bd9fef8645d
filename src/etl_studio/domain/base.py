"""
领域模型基类

所有对外 JSON 字段使用 camelCase（与前端约定一致），Python 侧使用 snake_case。
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 序列化的基础模型"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class EntityRecord(CamelModel):
    """存储中的实体记录，创建后不可原地修改"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PartialUpdate(CamelModel):
    """
    部分更新输入

    所有字段可选；只有显式提交的字段（model_fields_set）参与合并。
    子类通过 NON_NULLABLE 声明不允许显式置空的字段。
    """

    NON_NULLABLE: ClassVar[tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def _reject_explicit_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name in cls.NON_NULLABLE:
            raise ValueError("Field may not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """返回显式提交的字段（保留嵌套模型实例）"""
        return {name: getattr(self, name) for name in self.model_fields_set}
