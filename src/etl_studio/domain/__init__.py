"""
domain/ - 领域层

- users/: 用户
- pipeline/: 管线、作业、调度
- connectors/: 连接器及按类型区分的连接配置
- dashboard/: 仪表盘统计
- validation: 创建/更新输入的结构校验
"""
