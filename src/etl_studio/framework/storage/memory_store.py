"""
内存实体存储

以进程生命周期为限的键值存储，管理五类实体：用户、管线、连接器、作业、调度。

约定：
- 每类实体独立分配单调递增的 id，删除后 id 不会被复用
- createdAt 只在创建时写入一次；管线每次更新刷新 updatedAt
- 查询缺失记录返回 None / False，不抛异常
- 不做外键检查，userId 只是归属标记，不做访问控制
- 所有公开操作由同一把可重入锁串行化

进程重启后全部数据丢失，并由 seed 模块重新写入示例数据。
"""

import itertools
import threading
from collections.abc import Callable, Iterator, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from etl_studio.domain.connectors.models import (
    Connector,
    ConnectorCreate,
    ConnectorStatus,
)
from etl_studio.domain.pipeline.models import (
    Job,
    JobCreate,
    Pipeline,
    PipelineCreate,
    Schedule,
    ScheduleCreate,
)
from etl_studio.domain.users.models import User, UserCreate
from etl_studio.framework.shared.exceptions import ConflictError
from etl_studio.framework.shared.logging import get_logger
from etl_studio.framework.storage.connectivity import (
    ConnectivityProbe,
    SimulatedConnectivityProbe,
)

logger = get_logger(__name__)

RecordT = TypeVar("RecordT")

Clock = Callable[[], datetime]

# 创建后不允许通过更新修改的字段
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def utcnow() -> datetime:
    """当前 UTC 时间（带时区）"""
    return datetime.now(timezone.utc)


class EntityCollection(Generic[RecordT]):
    """单类实体的有序集合，按插入顺序迭代"""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._records: dict[int, RecordT] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(list(self._records.values()))

    def next_id(self) -> int:
        return next(self._ids)

    def get(self, record_id: int) -> RecordT | None:
        return self._records.get(record_id)

    def put(self, record: RecordT) -> RecordT:
        self._records[record.id] = record
        return record

    def remove(self, record_id: int) -> bool:
        return self._records.pop(record_id, None) is not None

    def load(self, records: list[RecordT]) -> None:
        """写入带 id 的既有记录，并把 id 计数器推进到最大 id 之后"""
        for record in records:
            self._records[record.id] = record
        if self._records:
            self._ids = itertools.count(max(self._records) + 1)

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [record for record in self._records.values() if predicate(record)]


class EntityStore:
    """
    内存实体存储

    Args:
        clock: 时间源，用于 createdAt / updatedAt / lastTested
        probe: 连接器连通性探测器，默认按 80% 概率模拟成功
    """

    def __init__(
        self,
        clock: Clock | None = None,
        probe: ConnectivityProbe | None = None,
    ) -> None:
        self.clock = clock or utcnow
        self.probe = probe or SimulatedConnectivityProbe()
        self._lock = threading.RLock()

        self.users: EntityCollection[User] = EntityCollection("user")
        self.pipelines: EntityCollection[Pipeline] = EntityCollection("pipeline")
        self.connectors: EntityCollection[Connector] = EntityCollection("connector")
        self.jobs: EntityCollection[Job] = EntityCollection("job")
        self.schedules: EntityCollection[Schedule] = EntityCollection("schedule")

    def load_records(
        self,
        *,
        users: Sequence[User] = (),
        pipelines: Sequence[Pipeline] = (),
        connectors: Sequence[Connector] = (),
        jobs: Sequence[Job] = (),
        schedules: Sequence[Schedule] = (),
    ) -> None:
        """批量写入带 id 的完整记录（用于启动时的示例数据）"""
        with self._lock:
            self.users.load(list(users))
            self.pipelines.load(list(pipelines))
            self.connectors.load(list(connectors))
            self.jobs.load(list(jobs))
            self.schedules.load(list(schedules))

    def _merge(
        self, collection: EntityCollection[RecordT], record_id: int, changes: Mapping[str, Any]
    ) -> RecordT | None:
        current = collection.get(record_id)
        if current is None:
            return None
        fields = type(current).model_fields
        update = {
            name: value for name, value in changes.items()
            if name in fields and name not in IMMUTABLE_FIELDS
        }
        updated = collection.put(current.model_copy(update=update))
        logger.debug("记录已更新", kind=collection.kind, id=record_id, fields=sorted(update))
        return updated

    def _delete(self, collection: EntityCollection[Any], record_id: int) -> bool:
        deleted = collection.remove(record_id)
        if deleted:
            logger.debug("记录已删除", kind=collection.kind, id=record_id)
        return deleted

    # 用户

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            matches = self.users.filter(lambda user: user.username == username)
            return matches[0] if matches else None

    def create_user(self, data: UserCreate) -> User:
        """创建用户，用户名重复时抛出 ConflictError"""
        with self._lock:
            if self.get_user_by_username(data.username) is not None:
                raise ConflictError(
                    f"Username already exists: {data.username}",
                    field="username",
                    value=data.username,
                )
            user = self.users.put(User(id=self.users.next_id(), **dict(data)))
            logger.debug("记录已创建", kind="user", id=user.id)
            return user

    # 管线

    def list_pipelines(self, user_id: int) -> list[Pipeline]:
        with self._lock:
            return self.pipelines.filter(lambda pipeline: pipeline.user_id == user_id)

    def get_pipeline(self, pipeline_id: int) -> Pipeline | None:
        with self._lock:
            return self.pipelines.get(pipeline_id)

    def create_pipeline(self, data: PipelineCreate) -> Pipeline:
        with self._lock:
            now = self.clock()
            pipeline = self.pipelines.put(
                Pipeline(
                    id=self.pipelines.next_id(),
                    created_at=now,
                    updated_at=now,
                    **dict(data),
                )
            )
            logger.debug("记录已创建", kind="pipeline", id=pipeline.id)
            return pipeline

    def update_pipeline(self, pipeline_id: int, changes: Mapping[str, Any]) -> Pipeline | None:
        with self._lock:
            return self._merge(
                self.pipelines, pipeline_id, {**changes, "updated_at": self.clock()}
            )

    def delete_pipeline(self, pipeline_id: int) -> bool:
        with self._lock:
            return self._delete(self.pipelines, pipeline_id)

    # 连接器

    def list_connectors(self, user_id: int) -> list[Connector]:
        with self._lock:
            return self.connectors.filter(lambda connector: connector.user_id == user_id)

    def get_connector(self, connector_id: int) -> Connector | None:
        with self._lock:
            return self.connectors.get(connector_id)

    def create_connector(self, data: ConnectorCreate) -> Connector:
        with self._lock:
            connector = self.connectors.put(
                Connector(
                    id=self.connectors.next_id(),
                    created_at=self.clock(),
                    last_tested=None,
                    **dict(data),
                )
            )
            logger.debug("记录已创建", kind="connector", id=connector.id)
            return connector

    def update_connector(
        self, connector_id: int, changes: Mapping[str, Any]
    ) -> Connector | None:
        with self._lock:
            return self._merge(self.connectors, connector_id, changes)

    def delete_connector(self, connector_id: int) -> bool:
        with self._lock:
            return self._delete(self.connectors, connector_id)

    def test_connector(self, connector_id: int) -> bool:
        """
        模拟连接测试（非幂等）

        连接器不存在时返回 False；否则调用探测器，成功置为 active、失败置为 error，
        并把 lastTested 更新为当前时间。
        """
        with self._lock:
            connector = self.connectors.get(connector_id)
            if connector is None:
                logger.info("连接器测试失败：记录不存在", connector_id=connector_id)
                return False

            success = bool(self.probe(connector))
            self.connectors.put(
                connector.model_copy(
                    update={
                        "status": ConnectorStatus.ACTIVE if success else ConnectorStatus.ERROR,
                        "last_tested": self.clock(),
                    }
                )
            )
            logger.info(
                "连接器测试完成",
                connector_id=connector_id,
                connector_type=connector.type,
                success=success,
            )
            return success

    # 作业

    def list_jobs(self) -> list[Job]:
        with self._lock:
            return list(self.jobs)

    def list_jobs_by_pipeline(self, pipeline_id: int) -> list[Job]:
        with self._lock:
            return self.jobs.filter(lambda job: job.pipeline_id == pipeline_id)

    def get_job(self, job_id: int) -> Job | None:
        with self._lock:
            return self.jobs.get(job_id)

    def create_job(self, data: JobCreate) -> Job:
        with self._lock:
            job = self.jobs.put(
                Job(id=self.jobs.next_id(), created_at=self.clock(), **dict(data))
            )
            logger.debug("记录已创建", kind="job", id=job.id)
            return job

    def update_job(self, job_id: int, changes: Mapping[str, Any]) -> Job | None:
        with self._lock:
            return self._merge(self.jobs, job_id, changes)

    def delete_job(self, job_id: int) -> bool:
        with self._lock:
            return self._delete(self.jobs, job_id)

    # 调度

    def list_schedules(self) -> list[Schedule]:
        with self._lock:
            return list(self.schedules)

    def list_schedules_by_pipeline(self, pipeline_id: int) -> list[Schedule]:
        with self._lock:
            return self.schedules.filter(lambda schedule: schedule.pipeline_id == pipeline_id)

    def get_schedule(self, schedule_id: int) -> Schedule | None:
        with self._lock:
            return self.schedules.get(schedule_id)

    def create_schedule(self, data: ScheduleCreate) -> Schedule:
        with self._lock:
            schedule = self.schedules.put(
                Schedule(id=self.schedules.next_id(), created_at=self.clock(), **dict(data))
            )
            logger.debug("记录已创建", kind="schedule", id=schedule.id)
            return schedule

    def update_schedule(
        self, schedule_id: int, changes: Mapping[str, Any]
    ) -> Schedule | None:
        with self._lock:
            return self._merge(self.schedules, schedule_id, changes)

    def delete_schedule(self, schedule_id: int) -> bool:
        with self._lock:
            return self._delete(self.schedules, schedule_id)
