"""
测试固定装置

- store: 不含示例数据、时钟固定、连通性探测结果固定的存储
- seeded_store: 写入示例数据的存储
- client: 绑定独立存储的 TestClient
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from etl_studio.api.main import create_app
from etl_studio.framework.shared.config import Settings
from etl_studio.framework.storage import FixedConnectivityProbe, build_store


class StepClock:
    """每次调用前进一秒的可控时钟"""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime.now(timezone.utc).replace(microsecond=0)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def probe() -> FixedConnectivityProbe:
    return FixedConnectivityProbe(True)


@pytest.fixture
def store(clock, probe):
    return build_store(seed=False, clock=clock, probe=probe)


@pytest.fixture
def seeded_store(clock, probe):
    return build_store(seed=True, clock=clock, probe=probe)


@pytest.fixture
def app_settings() -> Settings:
    return Settings(ENVIRONMENT="testing", SEED_SAMPLE_DATA=False)


@pytest.fixture
def client(store, app_settings):
    app = create_app(store=store, settings=app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(seeded_store, app_settings):
    app = create_app(store=seeded_store, settings=app_settings)
    with TestClient(app) as test_client:
        yield test_client
