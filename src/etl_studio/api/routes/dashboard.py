"""
仪表盘路由
"""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from etl_studio.api.dependencies import get_current_user_id, get_store
from etl_studio.domain.dashboard.stats import DashboardStats, compute_dashboard_stats
from etl_studio.framework.storage import EntityStore

router = APIRouter(tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    store: EntityStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> DashboardStats:
    """
    获取仪表盘统计

    每次请求都从存储重新计算；dataProcessed 为固定占位值。
    """
    try:
        return compute_dashboard_stats(store, user_id)
    except Exception as e:
        logger.error(f"获取仪表盘统计失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard stats") from e
