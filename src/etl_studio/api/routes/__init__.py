"""
API 路由模块

主要路由：
- pipelines: 管线
- connectors: 连接器（含模拟连接测试）
- jobs: 作业
- schedules: 调度
- dashboard: 仪表盘统计
"""

__all__ = ["pipelines", "connectors", "jobs", "schedules", "dashboard"]
