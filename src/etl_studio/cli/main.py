"""
CLI 主入口

基于 Typer 实现：
- serve: 启动 API 服务
- version / status: 版本与配置状态
- seed: 以表格展示启动示例数据
- stats: 在新建的示例存储上计算仪表盘统计
"""

import typer
from loguru import logger
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from etl_studio import __description__, __version__
from etl_studio.domain.dashboard.stats import compute_dashboard_stats
from etl_studio.framework.shared.config import get_settings
from etl_studio.framework.storage import DEFAULT_USER_ID, build_store

console = Console()

app = typer.Typer(
    name="etl-studio",
    help=__description__,
    rich_markup_mode="markdown",
    no_args_is_help=True,
)


def setup_logging(verbose: int = 0) -> None:
    """设置日志配置"""
    logger.remove()
    log_level = "DEBUG" if verbose > 0 else "INFO"
    logger.add(
        RichHandler(console=console, markup=True, rich_tracebacks=True),
        level=log_level,
        format="{message}"
    )


VERBOSE_OPTION = typer.Option(0, "--verbose", "-v", count=True, help="增加输出详细程度")
HOST_OPTION = typer.Option(None, "--host", help="监听地址，默认取 API_HOST")
PORT_OPTION = typer.Option(None, "--port", help="监听端口，默认取 API_PORT")
RELOAD_OPTION = typer.Option(False, "--reload", help="代码变更时自动重载")


@app.callback()
def main_callback(verbose: int = VERBOSE_OPTION) -> None:
    """主回调函数，处理全局选项"""
    setup_logging(verbose)


@app.command()
def version() -> None:
    """显示版本信息"""
    console.print(f"[bold]etl-studio[/bold] {__version__}")
    console.print(__description__)


@app.command()
def status() -> None:
    """显示配置状态"""
    settings = get_settings()

    console.print("[bold]系统状态[/bold]")
    for key, value in settings.get_environment_info().items():
        console.print(f"{key}: {value}")

    problems = settings.validate_config()
    if problems:
        console.print(f"[red]❌[/red] 配置存在 {len(problems)} 个问题:")
        for problem in problems:
            console.print(f"  - {problem}")
        raise typer.Exit(code=1)

    console.print("[green]✅[/green] 配置有效")


@app.command()
def serve(
    host: str = HOST_OPTION,
    port: int = PORT_OPTION,
    reload: bool = RELOAD_OPTION,
) -> None:
    """启动 API 服务"""
    import uvicorn

    settings = get_settings()
    host = host or settings.API_HOST
    port = port or settings.API_PORT

    logger.info(f"🚀 启动 API 服务: http://{host}:{port}")
    uvicorn.run(
        "etl_studio.api.main:app",
        host=host,
        port=port,
        reload=reload or settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


@app.command()
def seed() -> None:
    """展示启动示例数据"""
    store = build_store(seed=True)

    connectors = Table(title="Connectors")
    for column in ("id", "name", "type", "status"):
        connectors.add_column(column)
    for connector in store.list_connectors(DEFAULT_USER_ID):
        connectors.add_row(
            str(connector.id), connector.name, connector.type, connector.status.value
        )

    pipelines = Table(title="Pipelines")
    for column in ("id", "name", "status", "nodes"):
        pipelines.add_column(column)
    for pipeline in store.list_pipelines(DEFAULT_USER_ID):
        pipelines.add_row(
            str(pipeline.id),
            pipeline.name,
            pipeline.status.value,
            str(len(pipeline.configuration.nodes)),
        )

    jobs = Table(title="Jobs")
    for column in ("id", "pipeline", "status", "progress"):
        jobs.add_column(column)
    for job in store.list_jobs():
        jobs.add_row(str(job.id), str(job.pipeline_id), job.status.value, f"{job.progress}%")

    schedules = Table(title="Schedules")
    for column in ("id", "pipeline", "cron", "active"):
        schedules.add_column(column)
    for schedule in store.list_schedules():
        schedules.add_row(
            str(schedule.id),
            str(schedule.pipeline_id),
            schedule.cron_expression,
            "yes" if schedule.is_active else "no",
        )

    user = store.get_user(DEFAULT_USER_ID)
    console.print(f"[bold]用户:[/bold] {user.username if user else '-'}")
    for table in (connectors, pipelines, jobs, schedules):
        console.print(table)


@app.command()
def stats() -> None:
    """计算示例数据的仪表盘统计"""
    store = build_store(seed=True)
    result = compute_dashboard_stats(store, DEFAULT_USER_ID)

    console.print("[bold]仪表盘统计[/bold]")
    for key, value in result.model_dump(by_alias=True).items():
        console.print(f"{key}: {value}")


if __name__ == "__main__":
    app()
