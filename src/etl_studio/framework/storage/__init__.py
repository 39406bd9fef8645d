"""
storage/ - 存储层

- memory_store: 进程内实体存储
- seed: 启动示例数据
- connectivity: 连接器连通性探测（模拟）
"""

from .connectivity import (
    ConnectivityProbe,
    FixedConnectivityProbe,
    SimulatedConnectivityProbe,
)
from .memory_store import EntityStore
from .seed import DEFAULT_USER_ID, build_store, seed_sample_data

__all__ = [
    "EntityStore", "build_store", "seed_sample_data", "DEFAULT_USER_ID",
    "ConnectivityProbe", "SimulatedConnectivityProbe", "FixedConnectivityProbe",
]
