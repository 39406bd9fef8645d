"""
仪表盘统计

每次调用都从存储重新计算，不保存任何状态。
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from etl_studio.domain.base import CamelModel
from etl_studio.domain.pipeline.models import Job, JobStatus, PipelineStatus

if TYPE_CHECKING:
    from etl_studio.framework.storage.memory_store import EntityStore

# 占位值，不对应任何真实指标
DATA_PROCESSED_PLACEHOLDER = "2.4TB"


class DashboardStats(CamelModel):
    """仪表盘统计结果"""
    active_pipelines: int
    data_sources: int
    jobs_today: int
    data_processed: str
    success_rate: str


def local_date(moment: datetime) -> date:
    """按本地时区取日历日期"""
    return moment.astimezone().date()


def jobs_created_on(jobs: list[Job], day: date) -> list[Job]:
    return [job for job in jobs if local_date(job.created_at) == day]


def format_success_rate(completed: int, total: int) -> str:
    """
    成功率百分比，保留一位小数；total 为 0 时为 "0.0"

    按浮点数的精确值四舍五入（半数进位），6.25 得到 "6.3"。
    """
    rate = completed / total * 100 if total else 0.0
    return str(Decimal(rate).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_dashboard_stats(
    store: "EntityStore", user_id: int, now: datetime | None = None
) -> DashboardStats:
    """
    计算指定用户的仪表盘统计

    Args:
        store: EntityStore 实例
        user_id: 归属用户
        now: 当前时间，默认取存储时钟

    Returns:
        DashboardStats: activePipelines、dataSources、jobsToday、dataProcessed、successRate
    """
    today = local_date(now or store.clock())

    pipelines = store.list_pipelines(user_id)
    connectors = store.list_connectors(user_id)
    todays_jobs = jobs_created_on(store.list_jobs(), today)
    completed = sum(1 for job in todays_jobs if job.status == JobStatus.COMPLETED)

    return DashboardStats(
        active_pipelines=sum(1 for p in pipelines if p.status == PipelineStatus.ACTIVE),
        data_sources=len(connectors),
        jobs_today=len(todays_jobs),
        data_processed=DATA_PROCESSED_PLACEHOLDER,
        success_rate=format_success_rate(completed, len(todays_jobs)),
    )
