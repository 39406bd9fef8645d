"""
etl_studio - ETL 管线设计、调度与监控演示服务

提供仪表盘、管线构建器、作业监控与 cron 风格调度器所需的 REST API，
数据保存在进程内存中。系统不会真正执行管线、连接数据库或解析 cron 表达式：
作业进度、连接器测试结果均为示例数据或模拟结果。

架构分层：
- framework/: 框架层 - 配置、日志、异常、内存存储
- domain/: 领域层 - 实体模型、输入验证、仪表盘统计
- api/: 接口层 - FastAPI REST API
- cli/: 工具层 - Typer 命令行工具
"""

__version__ = "0.1.0"
__description__ = "ETL 管线设计、调度与监控演示服务"
