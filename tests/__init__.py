"""
tests/ - 测试目录

- unit/: 存储、验证、统计、配置等单元测试
- integration/: 基于 TestClient 的 HTTP 集成测试
- contract/: OpenAPI 契约测试
- cli_snapshots/: CLI 命令测试

每个测试使用独立构造的存储实例，互不影响。
"""
