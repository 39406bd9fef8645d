"""
FastAPI 主应用入口

- 应用工厂 create_app：显式构造实体存储并挂到 app.state，测试可注入独立实例
- 中间件配置：请求日志、CORS
- 路由注册
- 统一错误处理：404 {message}、400 {message, errors[]}、500 通用消息
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from etl_studio import __description__, __version__
from etl_studio.api import middleware
from etl_studio.api.routes import connectors, dashboard, jobs, pipelines, schedules
from etl_studio.framework.shared.config import Settings, get_settings
from etl_studio.framework.shared.exceptions import (
    ConfigurationError,
    EtlStudioError,
    ValidationError,
)
from etl_studio.framework.storage import EntityStore, build_store


def create_app(
    store: EntityStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    创建 FastAPI 应用实例

    Args:
        store: 实体存储；为空时按配置新建（SEED_SAMPLE_DATA 决定是否写入示例数据）
        settings: 应用配置；为空时使用全局配置
    """
    settings = settings or get_settings()
    check_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """应用生命周期管理"""
        logger.info(f"🚀 {settings.PROJECT_NAME} API 服务启动中...")
        yield
        logger.info(f"🛑 {settings.PROJECT_NAME} API 服务正在关闭...")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=__description__,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_url="/openapi.json"
    )

    app.state.settings = settings
    app.state.store = store if store is not None else build_store(seed=settings.SEED_SAMPLE_DATA)

    configure_middleware(app, settings)
    configure_routes(app)
    configure_exception_handlers(app)

    return app


def check_settings(settings: Settings) -> None:
    """
    检查配置

    生产环境下配置问题直接中止启动，其他环境只记录警告。
    """
    problems = settings.validate_config()
    if not problems:
        return
    if settings.is_production:
        raise ConfigurationError("; ".join(problems), config_key=problems[0].split()[0])
    for problem in problems:
        logger.warning(f"⚠️ 配置问题: {problem}")


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """配置中间件"""
    app.middleware("http")(middleware.log_requests)
    configure_cors(app, settings)


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """配置 CORS 中间件"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def configure_routes(app: FastAPI) -> None:
    """配置路由"""
    app.include_router(pipelines.router, prefix="/api/pipelines")
    app.include_router(connectors.router, prefix="/api/connectors")
    app.include_router(jobs.router, prefix="/api/jobs")
    app.include_router(schedules.router, prefix="/api/schedules")
    app.include_router(dashboard.router, prefix="/api/dashboard")


def _format_request_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"path": list(error.get("loc", ())), "message": error.get("msg", ""), "code": error.get("type", "")}
        for error in exc.errors()
    ]


def configure_exception_handlers(app: FastAPI) -> None:
    """配置全局异常处理器"""

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """验证异常：逐字段列出错误"""
        logger.warning(f"验证异常: {exc.message} ({len(exc.errors)} 个字段)")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(EtlStudioError)
    async def etl_studio_exception_handler(
        request: Request, exc: EtlStudioError
    ) -> JSONResponse:
        """自定义异常处理"""
        status_code = _get_status_code_for_exception(exc)
        if status_code >= 500:
            logger.error(f"ETL Studio 异常: {exc.error_code} - {exc.message}")
        else:
            logger.info(f"ETL Studio 异常: {exc.error_code} - {exc.message}")
        return JSONResponse(status_code=status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """请求格式错误（JSON 不合法、路径参数类型错误等）"""
        logger.warning(f"请求格式错误: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request", "errors": _format_request_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """HTTP 异常统一为 {message}"""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """全局异常处理，不向调用方暴露内部细节"""
        logger.exception(f"全局异常: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error"},
        )


def _get_status_code_for_exception(exc: EtlStudioError) -> int:
    """根据异常类型获取对应的 HTTP 状态码"""
    status_code_map = {
        "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
        "NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "CONFLICT": status.HTTP_409_CONFLICT,
        "CONFIG_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    return status_code_map.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


# 创建应用实例
app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "etl_studio.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
