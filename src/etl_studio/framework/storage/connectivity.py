"""
连接器连通性探测

当前只有模拟实现：按固定概率返回成功，不会真正连接任何外部系统。
真实实现只需满足 ConnectivityProbe 协议（connector -> bool），
存储层会负责更新 status 与 lastTested。
"""

import random
from typing import Protocol

from etl_studio.domain.connectors.models import Connector

DEFAULT_SUCCESS_RATE = 0.8


class ConnectivityProbe(Protocol):
    """连通性探测协议"""

    def __call__(self, connector: Connector) -> bool:
        """返回连接是否成功"""


class SimulatedConnectivityProbe:
    """
    模拟连通性探测

    Args:
        success_rate: 成功概率，取值 [0, 1]
        rng: 随机数源，测试时可注入固定种子的 random.Random
    """

    def __init__(
        self, success_rate: float = DEFAULT_SUCCESS_RATE, rng: random.Random | None = None
    ) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"success_rate 必须在 [0, 1] 范围内: {success_rate}")
        self.success_rate = success_rate
        self.rng = rng or random.Random()

    def __call__(self, connector: Connector) -> bool:
        return self.rng.random() < self.success_rate


class FixedConnectivityProbe:
    """总是返回固定结果的探测器"""

    def __init__(self, outcome: bool) -> None:
        self.outcome = outcome

    def __call__(self, connector: Connector) -> bool:
        return self.outcome
