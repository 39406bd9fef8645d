"""
Pipeline 领域模型

定义管线、作业（Job）与调度（Schedule）的记录和输入模型。

说明：
- 作业进度、日志以及调度的 nextRun/lastRun 只是被保存的状态，
  系统不会执行管线，也不会解析 cron 表达式。
- pipelineId 等外键不做引用完整性检查。
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from etl_studio.domain.base import CamelModel, EntityRecord, PartialUpdate


class PipelineStatus(str, Enum):
    """管线状态"""
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    ERROR = "error"


class JobStatus(str, Enum):
    """作业状态"""
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class NodePosition(CamelModel):
    """画布坐标"""
    x: float
    y: float


class PipelineNode(CamelModel):
    """管线画布中的节点：source / transform / destination"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    id: str
    type: str
    source_type: str | None = None
    transform_type: str | None = None
    destination_type: str | None = None
    position: NodePosition
    data: Any = None


class PipelineConnection(CamelModel):
    """节点之间的连线"""
    source: str
    target: str


class PipelineConfiguration(CamelModel):
    """管线配置：节点、连线以及文本形式的 YAML 配置"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    nodes: list[PipelineNode] = Field(default_factory=list)
    connections: list[PipelineConnection] = Field(default_factory=list)
    yaml_config: str = ""


# Pipeline

class PipelineCreate(CamelModel):
    """创建管线输入"""
    name: str
    description: str | None = None
    configuration: PipelineConfiguration
    status: PipelineStatus = PipelineStatus.DRAFT
    user_id: int


class PipelineUpdate(PartialUpdate):
    """管线部分更新输入"""
    NON_NULLABLE = ("name", "configuration", "status", "user_id")

    name: str | None = None
    description: str | None = None
    configuration: PipelineConfiguration | None = None
    status: PipelineStatus | None = None
    user_id: int | None = None


class Pipeline(EntityRecord):
    """管线记录"""
    id: int
    name: str
    description: str | None = None
    configuration: PipelineConfiguration
    status: PipelineStatus = PipelineStatus.DRAFT
    created_at: datetime
    updated_at: datetime
    user_id: int


# Job

class JobCreate(CamelModel):
    """创建作业输入"""
    pipeline_id: int
    status: JobStatus = JobStatus.QUEUED
    start_time: datetime | None = None
    end_time: datetime | None = None
    progress: int = Field(default=0, ge=0, le=100)
    logs: list[str] = Field(default_factory=list)
    error_message: str | None = None


class JobUpdate(PartialUpdate):
    """作业部分更新输入"""
    NON_NULLABLE = ("pipeline_id", "status", "progress", "logs")

    pipeline_id: int | None = None
    status: JobStatus | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    logs: list[str] | None = None
    error_message: str | None = None


class Job(EntityRecord):
    """作业记录"""
    id: int
    pipeline_id: int
    status: JobStatus = JobStatus.QUEUED
    start_time: datetime | None = None
    end_time: datetime | None = None
    progress: int = 0
    logs: list[str] = Field(default_factory=list)
    error_message: str | None = None
    created_at: datetime


# Schedule

class ScheduleCreate(CamelModel):
    """创建调度输入（cron 表达式不做校验）"""
    pipeline_id: int
    cron_expression: str
    is_active: bool = True
    next_run: datetime | None = None
    last_run: datetime | None = None


class ScheduleUpdate(PartialUpdate):
    """调度部分更新输入"""
    NON_NULLABLE = ("pipeline_id", "cron_expression", "is_active")

    pipeline_id: int | None = None
    cron_expression: str | None = None
    is_active: bool | None = None
    next_run: datetime | None = None
    last_run: datetime | None = None


class Schedule(EntityRecord):
    """调度记录"""
    id: int
    pipeline_id: int
    cron_expression: str
    is_active: bool = True
    next_run: datetime | None = None
    last_run: datetime | None = None
    created_at: datetime
