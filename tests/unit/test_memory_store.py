"""
内存实体存储单元测试

覆盖 id 分配、部分更新合并、删除、按归属过滤以及模拟连接测试。
"""

import threading

import pytest

from etl_studio.domain.connectors.models import ConnectorCreate, ConnectorStatus
from etl_studio.domain.pipeline.models import (
    JobCreate,
    JobStatus,
    PipelineConfiguration,
    PipelineCreate,
    PipelineStatus,
    ScheduleCreate,
)
from etl_studio.domain.users.models import UserCreate
from etl_studio.framework.shared.exceptions import ConflictError
from etl_studio.framework.storage import EntityStore, FixedConnectivityProbe


def make_pipeline(name: str = "orders", user_id: int = 1) -> PipelineCreate:
    return PipelineCreate(name=name, configuration=PipelineConfiguration(), user_id=user_id)


def make_connector(name: str = "warehouse", user_id: int = 1) -> ConnectorCreate:
    return ConnectorCreate(
        name=name,
        type="postgresql",
        configuration={"host": "db.local", "database": "dw"},
        user_id=user_id,
    )


class TestIdAllocation:
    """id 分配测试"""

    def test_ids_start_at_one_and_increase(self, store):
        """测试 id 从 1 开始递增"""
        first = store.create_pipeline(make_pipeline("a"))
        second = store.create_pipeline(make_pipeline("b"))

        assert first.id == 1
        assert second.id == 2

    def test_ids_not_reused_after_delete(self, store):
        """测试删除后 id 不被复用"""
        store.create_pipeline(make_pipeline("a"))
        second = store.create_pipeline(make_pipeline("b"))
        assert store.delete_pipeline(second.id) is True

        third = store.create_pipeline(make_pipeline("c"))
        assert third.id == 3

    def test_each_kind_has_its_own_counter(self, store):
        """测试每类实体独立计数"""
        pipeline = store.create_pipeline(make_pipeline())
        connector = store.create_connector(make_connector())
        job = store.create_job(JobCreate(pipeline_id=pipeline.id))

        assert pipeline.id == connector.id == job.id == 1

    def test_counter_continues_after_seed(self, seeded_store):
        """测试示例数据写入后计数器从最大 id 之后继续"""
        connector = seeded_store.create_connector(make_connector())
        job = seeded_store.create_job(JobCreate(pipeline_id=1))

        assert connector.id == 4
        assert job.id == 3


class TestPipelineOperations:
    """管线操作测试"""

    def test_create_then_get(self, store):
        """测试创建后读取一致"""
        created = store.create_pipeline(make_pipeline("orders"))
        fetched = store.get_pipeline(created.id)

        assert fetched == created
        assert fetched.status == PipelineStatus.DRAFT
        assert fetched.created_at == fetched.updated_at

    def test_get_missing_returns_none(self, store):
        """测试读取不存在的记录返回 None"""
        assert store.get_pipeline(999) is None

    def test_update_merges_only_given_fields(self, store):
        """测试部分更新只修改提交的字段"""
        created = store.create_pipeline(make_pipeline("orders"))

        updated = store.update_pipeline(created.id, {"status": PipelineStatus.ACTIVE})

        assert updated.status == PipelineStatus.ACTIVE
        assert updated.name == "orders"
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    def test_update_ignores_immutable_and_unknown_fields(self, store):
        """测试更新不会修改 id / createdAt，也不会写入未知字段"""
        created = store.create_pipeline(make_pipeline())

        updated = store.update_pipeline(
            created.id, {"id": 42, "created_at": None, "bogus": "x"}
        )

        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert not hasattr(updated, "bogus")

    def test_update_missing_returns_none(self, store):
        """测试更新不存在的记录返回 None"""
        assert store.update_pipeline(5, {"name": "x"}) is None

    def test_delete_is_not_repeatable(self, store):
        """测试重复删除返回 False"""
        created = store.create_pipeline(make_pipeline())

        assert store.delete_pipeline(created.id) is True
        assert store.delete_pipeline(created.id) is False
        assert store.get_pipeline(created.id) is None

    def test_list_filters_by_owner(self, store):
        """测试列表按归属用户过滤并保持创建顺序"""
        store.create_pipeline(make_pipeline("a", user_id=1))
        store.create_pipeline(make_pipeline("b", user_id=2))
        store.create_pipeline(make_pipeline("c", user_id=1))

        names = [pipeline.name for pipeline in store.list_pipelines(1)]
        assert names == ["a", "c"]
        assert store.list_pipelines(3) == []


class TestConnectorOperations:
    """连接器操作测试"""

    def test_create_sets_defaults(self, store):
        """测试创建连接器的默认值"""
        connector = store.create_connector(make_connector())

        assert connector.status == ConnectorStatus.INACTIVE
        assert connector.last_tested is None

    def test_successful_test_marks_active(self, store):
        """测试探测成功时置为 active 并记录时间"""
        connector = store.create_connector(make_connector())

        assert store.test_connector(connector.id) is True

        tested = store.get_connector(connector.id)
        assert tested.status == ConnectorStatus.ACTIVE
        assert tested.last_tested is not None
        assert tested.last_tested > connector.created_at

    def test_failed_test_marks_error(self, clock):
        """测试探测失败时置为 error"""
        store = EntityStore(clock=clock, probe=FixedConnectivityProbe(False))
        connector = store.create_connector(make_connector())

        assert store.test_connector(connector.id) is False
        assert store.get_connector(connector.id).status == ConnectorStatus.ERROR

    def test_test_missing_connector(self, store):
        """测试不存在的连接器返回 False 且不修改数据"""
        assert store.test_connector(99) is False
        assert len(store.connectors) == 0

    def test_repeated_tests_refresh_timestamp(self, store):
        """测试重复测试会刷新 lastTested"""
        connector = store.create_connector(make_connector())

        store.test_connector(connector.id)
        first = store.get_connector(connector.id).last_tested
        store.test_connector(connector.id)
        second = store.get_connector(connector.id).last_tested

        assert second > first


class TestJobsAndSchedules:
    """作业与调度测试"""

    def test_job_defaults(self, store):
        """测试作业默认值"""
        job = store.create_job(JobCreate(pipeline_id=7))

        assert job.status == JobStatus.QUEUED
        assert job.progress == 0
        assert job.logs == []

    def test_list_jobs_by_pipeline(self, store):
        """测试按管线列出作业"""
        store.create_job(JobCreate(pipeline_id=1))
        store.create_job(JobCreate(pipeline_id=2))
        store.create_job(JobCreate(pipeline_id=1))

        assert [job.id for job in store.list_jobs_by_pipeline(1)] == [1, 3]
        assert len(store.list_jobs()) == 3

    def test_update_job_progress(self, store):
        """测试更新作业进度与状态"""
        job = store.create_job(JobCreate(pipeline_id=1))

        updated = store.update_job(
            job.id, {"status": JobStatus.RUNNING, "progress": 50, "logs": ["started"]}
        )

        assert updated.status == JobStatus.RUNNING
        assert updated.progress == 50
        assert updated.logs == ["started"]
        assert updated.created_at == job.created_at

    def test_schedule_toggle(self, store):
        """测试启用/停用调度"""
        schedule = store.create_schedule(
            ScheduleCreate(pipeline_id=1, cron_expression="*/5 * * * *")
        )
        assert schedule.is_active is True

        updated = store.update_schedule(schedule.id, {"is_active": False})
        assert updated.is_active is False
        assert updated.cron_expression == "*/5 * * * *"
        assert store.list_schedules_by_pipeline(1) == [updated]

    def test_delete_schedule(self, store):
        """测试删除调度"""
        schedule = store.create_schedule(ScheduleCreate(pipeline_id=1, cron_expression="@daily"))

        assert store.delete_schedule(schedule.id) is True
        assert store.list_schedules() == []


class TestUsers:
    """用户测试"""

    def test_create_and_lookup(self, store):
        """测试创建用户并按用户名查找"""
        user = store.create_user(UserCreate(username="alice", password="secret"))

        assert store.get_user(user.id) == user
        assert store.get_user_by_username("alice") == user
        assert store.get_user_by_username("bob") is None

    def test_duplicate_username_conflicts(self, store):
        """测试用户名重复抛出 ConflictError"""
        store.create_user(UserCreate(username="alice", password="secret"))

        with pytest.raises(ConflictError) as exc_info:
            store.create_user(UserCreate(username="alice", password="other"))

        assert exc_info.value.error_code == "CONFLICT"
        assert exc_info.value.details["field"] == "username"


class TestConcurrency:
    """并发测试"""

    def test_concurrent_creates_get_unique_ids(self, store):
        """测试并发创建不会分配重复 id"""

        def worker() -> None:
            for _ in range(50):
                store.create_job(JobCreate(pipeline_id=1))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [job.id for job in store.list_jobs()]
        assert len(ids) == 200
        assert len(set(ids)) == 200
