"""
连通性探测单元测试
"""

import random
from datetime import datetime, timezone

import pytest

from etl_studio.domain.connectors.models import Connector
from etl_studio.framework.storage import FixedConnectivityProbe, SimulatedConnectivityProbe

CONNECTOR = Connector(
    id=1,
    name="Warehouse",
    type="postgresql",
    configuration={},
    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    user_id=1,
)


class TestSimulatedConnectivityProbe:
    """模拟探测测试"""

    def test_rate_bounds(self):
        """测试成功率必须在 [0, 1]"""
        with pytest.raises(ValueError):
            SimulatedConnectivityProbe(success_rate=1.5)
        with pytest.raises(ValueError):
            SimulatedConnectivityProbe(success_rate=-0.1)

    def test_extreme_rates(self):
        """测试 0 与 1 的成功率"""
        assert SimulatedConnectivityProbe(success_rate=1.0)(CONNECTOR) is True
        assert SimulatedConnectivityProbe(success_rate=0.0)(CONNECTOR) is False

    def test_seeded_rng_is_reproducible(self):
        """测试固定种子结果可复现"""
        first = SimulatedConnectivityProbe(rng=random.Random(7))
        second = SimulatedConnectivityProbe(rng=random.Random(7))

        assert [first(CONNECTOR) for _ in range(20)] == [second(CONNECTOR) for _ in range(20)]

    def test_default_rate_is_roughly_eighty_percent(self):
        """测试默认成功率约为 80%"""
        probe = SimulatedConnectivityProbe(rng=random.Random(42))

        successes = sum(probe(CONNECTOR) for _ in range(2000))

        assert 1500 < successes < 1700


class TestFixedConnectivityProbe:
    """固定结果探测测试"""

    def test_outcome(self):
        """测试固定结果"""
        assert FixedConnectivityProbe(True)(CONNECTOR) is True
        assert FixedConnectivityProbe(False)(CONNECTOR) is False
