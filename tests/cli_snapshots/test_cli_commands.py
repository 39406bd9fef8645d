"""
CLI 命令测试

基于 typer.testing.CliRunner 调用命令并检查输出。
"""

from unittest.mock import patch

from typer.testing import CliRunner

from etl_studio import __version__
from etl_studio.cli.main import app
from etl_studio.framework.shared.config import reset_settings

runner = CliRunner()


class TestCLIInfrastructure:
    """CLI 基础命令测试"""

    def test_help_command(self):
        """测试帮助命令"""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("serve", "version", "status", "seed", "stats"):
            assert command in result.output

    def test_version_command(self):
        """测试版本命令"""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "etl-studio" in result.output
        assert __version__ in result.output

    def test_status_command(self, monkeypatch):
        """测试状态命令"""
        monkeypatch.setenv("ENVIRONMENT", "testing")
        reset_settings()
        try:
            result = runner.invoke(app, ["status"])
        finally:
            reset_settings()

        assert result.exit_code == 0
        assert "系统状态" in result.output
        assert "environment: testing" in result.output
        assert "配置有效" in result.output

    def test_status_reports_invalid_config(self, monkeypatch):
        """测试配置无效时退出码非零"""
        monkeypatch.setenv("ENVIRONMENT", "staging")
        reset_settings()
        try:
            result = runner.invoke(app, ["status"])
        finally:
            reset_settings()

        assert result.exit_code == 1
        assert "ENVIRONMENT" in result.output


class TestDataCommands:
    """示例数据命令测试"""

    def test_seed_command(self):
        """测试示例数据展示"""
        result = runner.invoke(app, ["seed"])

        assert result.exit_code == 0
        assert "admin" in result.output
        assert "Connectors" in result.output
        assert "Schedules" in result.output
        assert "mongodb" in result.output

    def test_stats_command(self):
        """测试仪表盘统计"""
        result = runner.invoke(app, ["stats"])

        assert result.exit_code == 0
        assert "activePipelines: 1" in result.output
        assert "dataSources: 3" in result.output
        assert "dataProcessed: 2.4TB" in result.output


class TestServeCommand:
    """服务启动命令测试"""

    def test_serve_uses_settings(self, monkeypatch):
        """测试未指定参数时使用配置中的地址与端口"""
        monkeypatch.setenv("API_PORT", "5050")
        monkeypatch.setenv("DEBUG", "false")
        reset_settings()
        try:
            with patch("uvicorn.run") as mock_run:
                result = runner.invoke(app, ["serve"])
        finally:
            reset_settings()

        assert result.exit_code == 0
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == "etl_studio.api.main:app"
        assert kwargs["port"] == 5050
        assert kwargs["reload"] is False

    def test_serve_options_override(self):
        """测试命令行参数覆盖配置"""
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--host", "0.0.0.0", "--port", "8001"])

        assert result.exit_code == 0
        kwargs = mock_run.call_args.kwargs
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 8001
