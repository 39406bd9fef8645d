"""
连接器领域模型

连接器的 configuration 形状由 type 决定：
- oracle / postgresql / mysql: 关系型数据库（host、port、database、username、password）
- mongodb: connectionString、database
- hive: server、port、database
- 其他类型：不做结构约束的 JSON 对象

连接器状态只会被“模拟测试”修改，系统不会真正连接外部数据源。
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from etl_studio.domain.base import CamelModel, EntityRecord, PartialUpdate


class ConnectorStatus(str, Enum):
    """连接器状态"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"


class ConnectionConfig(CamelModel):
    """连接配置基类，允许额外字段"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class RelationalConnectionConfig(ConnectionConfig):
    """关系型数据库连接配置"""
    host: str
    port: int | None = None
    database: str
    username: str | None = None
    password: str | None = None


class MongoConnectionConfig(ConnectionConfig):
    """MongoDB 连接配置"""
    connection_string: str
    database: str


class HiveConnectionConfig(ConnectionConfig):
    """Hive 连接配置"""
    server: str
    port: int | None = None
    database: str


# 按连接器类型索引的配置形状，未登记的类型按无约束文档处理
CONNECTION_CONFIG_TYPES: dict[str, type[ConnectionConfig]] = {
    "oracle": RelationalConnectionConfig,
    "postgresql": RelationalConnectionConfig,
    "mysql": RelationalConnectionConfig,
    "mongodb": MongoConnectionConfig,
    "hive": HiveConnectionConfig,
}


def get_config_schema(connector_type: str) -> type[ConnectionConfig] | None:
    """返回连接器类型对应的配置模型，未知类型返回 None"""
    return CONNECTION_CONFIG_TYPES.get(connector_type.lower())


class ConnectorCreate(CamelModel):
    """创建连接器输入"""
    name: str
    type: str
    configuration: dict[str, Any]
    status: ConnectorStatus = ConnectorStatus.INACTIVE
    user_id: int


class ConnectorUpdate(PartialUpdate):
    """连接器部分更新输入"""
    NON_NULLABLE = ("name", "type", "configuration", "status", "user_id")

    name: str | None = None
    type: str | None = None
    configuration: dict[str, Any] | None = None
    status: ConnectorStatus | None = None
    user_id: int | None = None


class Connector(EntityRecord):
    """连接器记录"""
    id: int
    name: str
    type: str
    configuration: dict[str, Any] = Field(default_factory=dict)
    status: ConnectorStatus = ConnectorStatus.INACTIVE
    last_tested: datetime | None = None
    created_at: datetime
    user_id: int


class ConnectorTestResult(CamelModel):
    """模拟连接测试结果"""
    success: bool
    connector: Connector | None = None
