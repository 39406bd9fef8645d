"""
启动示例数据

让界面首次加载时不为空：一个用户、三个连接器、一条管线、两个作业、一个调度。
字段值固定，时间戳相对于存储时钟的“当前时间”计算。
"""

from datetime import datetime, timedelta

from etl_studio.domain.connectors.models import Connector, ConnectorStatus
from etl_studio.domain.pipeline.models import (
    Job,
    JobStatus,
    NodePosition,
    Pipeline,
    PipelineConfiguration,
    PipelineConnection,
    PipelineNode,
    PipelineStatus,
    Schedule,
)
from etl_studio.domain.users.models import User
from etl_studio.framework.shared.logging import get_logger
from etl_studio.framework.storage.connectivity import ConnectivityProbe
from etl_studio.framework.storage.memory_store import Clock, EntityStore

logger = get_logger(__name__)

DEFAULT_USER_ID = 1

SAMPLE_YAML_CONFIG = """
transformations:
  - name: "customer_cleansing"
    type: "data_quality"
    rules:
      - field: "email"
        validation: "email_format"
      - field: "phone"
        standardize: "e164_format"

sources:
  oracle_orders:
    connection: "prod_oracle"
    query: "SELECT * FROM customers WHERE created_date >= '2024-01-01'"

targets:
  hive_warehouse:
    table: "analytics.customers_clean"
    mode: "append"
"""


def sample_users() -> list[User]:
    return [User(id=DEFAULT_USER_ID, username="admin", password="password")]


def sample_connectors(now: datetime) -> list[Connector]:
    return [
        Connector(
            id=1,
            name="Oracle Production",
            type="oracle",
            configuration={
                "host": "prod-oracle.company.com",
                "port": 1521,
                "database": "ORDERS_DB",
                "username": "etl_user",
            },
            status=ConnectorStatus.ACTIVE,
            last_tested=now,
            created_at=now,
            user_id=DEFAULT_USER_ID,
        ),
        Connector(
            id=2,
            name="MongoDB Atlas",
            type="mongodb",
            configuration={
                "connectionString": "mongodb+srv://cluster0.mongodb.net",
                "database": "user_events",
            },
            status=ConnectorStatus.ACTIVE,
            last_tested=now,
            created_at=now,
            user_id=DEFAULT_USER_ID,
        ),
        Connector(
            id=3,
            name="Cloudera Hive",
            type="hive",
            configuration={
                "server": "hadoop-master.local",
                "port": 10000,
                "database": "analytics",
            },
            status=ConnectorStatus.INACTIVE,
            last_tested=now - timedelta(hours=1),
            created_at=now,
            user_id=DEFAULT_USER_ID,
        ),
    ]


def sample_pipelines(now: datetime) -> list[Pipeline]:
    configuration = PipelineConfiguration(
        nodes=[
            PipelineNode(
                id="1", type="source", source_type="oracle",
                position=NodePosition(x=100, y=100),
            ),
            PipelineNode(
                id="2", type="transform", transform_type="filter",
                position=NodePosition(x=300, y=100),
            ),
            PipelineNode(
                id="3", type="destination", destination_type="hive",
                position=NodePosition(x=500, y=100),
            ),
        ],
        connections=[
            PipelineConnection(source="1", target="2"),
            PipelineConnection(source="2", target="3"),
        ],
        yaml_config=SAMPLE_YAML_CONFIG,
    )
    return [
        Pipeline(
            id=1,
            name="Customer Data ETL",
            description="Extract customer data from Oracle, transform and load to Hive",
            configuration=configuration,
            status=PipelineStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            user_id=DEFAULT_USER_ID,
        )
    ]


def sample_jobs(now: datetime) -> list[Job]:
    started = now - timedelta(seconds=750)
    return [
        Job(
            id=1,
            pipeline_id=1,
            status=JobStatus.RUNNING,
            start_time=started,
            progress=45,
            logs=[
                "Started pipeline execution",
                "Extracting data from Oracle",
                "Processing 10,000 records",
            ],
            created_at=started,
        ),
        Job(
            id=2,
            pipeline_id=1,
            status=JobStatus.QUEUED,
            progress=0,
            logs=["Job queued for execution"],
            created_at=now,
        ),
    ]


def sample_schedules(now: datetime) -> list[Schedule]:
    return [
        Schedule(
            id=1,
            pipeline_id=1,
            cron_expression="0 2 * * *",
            is_active=True,
            next_run=now + timedelta(days=1),
            last_run=now - timedelta(days=1),
            created_at=now,
        )
    ]


def seed_sample_data(store: EntityStore) -> EntityStore:
    """向存储写入示例数据"""
    now = store.clock()
    store.load_records(
        users=sample_users(),
        connectors=sample_connectors(now),
        pipelines=sample_pipelines(now),
        jobs=sample_jobs(now),
        schedules=sample_schedules(now),
    )
    logger.info(
        "示例数据已写入",
        users=len(store.users),
        connectors=len(store.connectors),
        pipelines=len(store.pipelines),
        jobs=len(store.jobs),
        schedules=len(store.schedules),
    )
    return store


def build_store(
    seed: bool = True,
    clock: Clock | None = None,
    probe: ConnectivityProbe | None = None,
) -> EntityStore:
    """创建存储实例，按需写入示例数据"""
    store = EntityStore(clock=clock, probe=probe)
    if seed:
        seed_sample_data(store)
    return store
