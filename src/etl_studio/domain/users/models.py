"""
用户领域模型

注意：密码以明文保存与比较，认证/授权需要整体重新设计后才能用于生产环境。
"""

from pydantic import Field

from etl_studio.domain.base import CamelModel, EntityRecord


class UserCreate(CamelModel):
    """创建用户输入"""
    username: str = Field(..., min_length=1)
    password: str


class User(EntityRecord):
    """用户记录"""
    id: int
    username: str
    password: str
