"""
api/ - 接口层

FastAPI REST API：管线、连接器、作业、调度与仪表盘统计。
"""
