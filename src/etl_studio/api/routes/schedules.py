"""
调度路由

调度只保存 cron 表达式与 nextRun/lastRun，不会解析或执行。
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from loguru import logger

from etl_studio.api.dependencies import get_store
from etl_studio.domain.pipeline.models import Schedule
from etl_studio.domain.validation import validate_schedule_create, validate_schedule_update
from etl_studio.framework.shared.exceptions import NotFoundError
from etl_studio.framework.storage import EntityStore

router = APIRouter(tags=["schedules"])


def _not_found(schedule_id: int) -> NotFoundError:
    return NotFoundError("Schedule not found", resource="schedule", resource_id=schedule_id)


@router.get("", response_model=list[Schedule])
async def list_schedules(store: EntityStore = Depends(get_store)) -> list[Schedule]:
    """列出全部调度"""
    try:
        return store.list_schedules()
    except Exception as e:
        logger.error(f"获取调度列表失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch schedules") from e


@router.get("/pipeline/{pipeline_id}", response_model=list[Schedule])
async def list_pipeline_schedules(
    pipeline_id: int,
    store: EntityStore = Depends(get_store),
) -> list[Schedule]:
    """列出某条管线的调度"""
    try:
        return store.list_schedules_by_pipeline(pipeline_id)
    except Exception as e:
        logger.error(f"获取管线调度失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch pipeline schedules") from e


@router.get("/{schedule_id}", response_model=Schedule)
async def get_schedule(schedule_id: int, store: EntityStore = Depends(get_store)) -> Schedule:
    """获取单个调度"""
    try:
        schedule = store.get_schedule(schedule_id)
    except Exception as e:
        logger.error(f"获取调度失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch schedule") from e

    if schedule is None:
        raise _not_found(schedule_id)
    return schedule


@router.post("", response_model=Schedule, status_code=status.HTTP_201_CREATED)
async def create_schedule(
    payload: Any = Body(...),
    store: EntityStore = Depends(get_store),
) -> Schedule:
    """创建调度"""
    data = validate_schedule_create(payload)

    try:
        schedule = store.create_schedule(data)
    except Exception as e:
        logger.error(f"创建调度失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to create schedule") from e

    logger.info(f"✅ 调度已创建: {schedule.id} ({schedule.cron_expression})")
    return schedule


@router.put("/{schedule_id}", response_model=Schedule)
async def update_schedule(
    schedule_id: int,
    payload: Any = Body(...),
    store: EntityStore = Depends(get_store),
) -> Schedule:
    """部分更新调度（例如启用/停用）"""
    try:
        current = store.get_schedule(schedule_id)
    except Exception as e:
        logger.error(f"更新调度失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to update schedule") from e

    if current is None:
        raise _not_found(schedule_id)

    changes = validate_schedule_update(payload).changes()

    try:
        schedule = store.update_schedule(schedule_id, changes)
    except Exception as e:
        logger.error(f"更新调度失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to update schedule") from e

    if schedule is None:
        raise _not_found(schedule_id)
    return schedule


@router.delete(
    "/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_schedule(
    schedule_id: int,
    store: EntityStore = Depends(get_store),
) -> Response:
    """删除调度"""
    try:
        deleted = store.delete_schedule(schedule_id)
    except Exception as e:
        logger.error(f"删除调度失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete schedule") from e

    if not deleted:
        raise _not_found(schedule_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
