"""
配置管理

基于 pydantic-settings 实现：
- 环境变量支持
- .env 文件加载
- 配置验证
- 默认值管理

注意：业务行为（连接器测试成功率、仪表盘占位值、默认用户）不通过环境变量配置。
"""

from pydantic import Field
from pydantic_settings import BaseSettings

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("console", "json")
VALID_ENVIRONMENTS = ("development", "testing", "production")


class Settings(BaseSettings):
    """应用配置类"""

    # 通用配置
    ENVIRONMENT: str = Field(default="development", description="运行环境")
    DEBUG: bool = Field(default=False, description="调试模式")
    LOG_LEVEL: str = Field(default="INFO", description="日志级别")
    LOG_FORMAT: str = Field(default="console", description="日志格式 (console, json)")
    PROJECT_NAME: str = Field(default="etl-studio", description="项目名称")

    # FastAPI 配置
    API_HOST: str = Field(default="127.0.0.1", description="API 主机地址")
    API_PORT: int = Field(default=5000, description="API 端口")
    API_CORS_ORIGINS: str = Field(
        default="http://localhost:5000", description="CORS 允许的源"
    )

    # 存储配置
    SEED_SAMPLE_DATA: bool = Field(default=True, description="启动时写入示例数据")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def is_development(self) -> bool:
        """是否为开发环境"""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """是否为生产环境"""
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        """是否为测试环境"""
        return self.ENVIRONMENT == "testing"

    def get_cors_origins(self) -> list[str]:
        """获取 CORS 允许的源列表"""
        if not self.API_CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.API_CORS_ORIGINS.split(",") if origin.strip()]

    def validate_config(self) -> list[str]:
        """验证配置，返回问题列表"""
        errors = []

        if self.ENVIRONMENT not in VALID_ENVIRONMENTS:
            errors.append(f"ENVIRONMENT 必须是 {', '.join(VALID_ENVIRONMENTS)} 之一")

        if self.LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL 必须是 {', '.join(VALID_LOG_LEVELS)} 之一")

        if self.LOG_FORMAT.lower() not in VALID_LOG_FORMATS:
            errors.append(f"LOG_FORMAT 必须是 {', '.join(VALID_LOG_FORMATS)} 之一")

        if not 0 < self.API_PORT < 65536:
            errors.append("API_PORT 必须在 1-65535 范围内")

        return errors

    def is_valid(self) -> bool:
        """检查配置是否有效"""
        return len(self.validate_config()) == 0

    def get_environment_info(self) -> dict:
        """获取环境信息"""
        return {
            "environment": self.ENVIRONMENT,
            "debug": self.DEBUG,
            "log_level": self.LOG_LEVEL,
            "log_format": self.LOG_FORMAT,
            "api_host": self.API_HOST,
            "api_port": self.API_PORT,
            "seed_sample_data": self.SEED_SAMPLE_DATA,
        }


# 全局配置实例
_settings = None


def get_settings() -> Settings:
    """获取全局配置实例"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """清除缓存的配置实例（测试用）"""
    global _settings
    _settings = None
