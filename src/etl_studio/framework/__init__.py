"""
framework/ - 框架层

提供共用基础设施：
- shared/: 配置、日志、异常
- storage/: 内存实体存储与示例数据
"""
