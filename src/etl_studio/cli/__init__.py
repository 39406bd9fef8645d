"""
cli/ - 命令行工具

基于 Typer：启动服务、查看配置与示例数据。
"""
