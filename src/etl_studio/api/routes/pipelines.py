"""
管线路由

提供管线的增删改查：
- 列表只返回当前用户的管线，按创建顺序
- 更新为部分合并，并刷新 updatedAt
- 删除成功返回 204
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from loguru import logger

from etl_studio.api.dependencies import get_current_user_id, get_store, stamp_owner
from etl_studio.domain.pipeline.models import Pipeline
from etl_studio.domain.validation import validate_pipeline_create, validate_pipeline_update
from etl_studio.framework.shared.exceptions import NotFoundError
from etl_studio.framework.storage import EntityStore

router = APIRouter(tags=["pipelines"])


def _not_found(pipeline_id: int) -> NotFoundError:
    return NotFoundError("Pipeline not found", resource="pipeline", resource_id=pipeline_id)


@router.get("", response_model=list[Pipeline])
async def list_pipelines(
    store: EntityStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> list[Pipeline]:
    """列出当前用户的管线"""
    try:
        return store.list_pipelines(user_id)
    except Exception as e:
        logger.error(f"获取管线列表失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch pipelines") from e


@router.get("/{pipeline_id}", response_model=Pipeline)
async def get_pipeline(
    pipeline_id: int,
    store: EntityStore = Depends(get_store),
) -> Pipeline:
    """获取单条管线"""
    try:
        pipeline = store.get_pipeline(pipeline_id)
    except Exception as e:
        logger.error(f"获取管线失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch pipeline") from e

    if pipeline is None:
        raise _not_found(pipeline_id)
    return pipeline


@router.post("", response_model=Pipeline, status_code=status.HTTP_201_CREATED)
async def create_pipeline(
    payload: Any = Body(...),
    store: EntityStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> Pipeline:
    """
    创建管线

    userId 由服务端写入，忽略请求体中的值。
    """
    data = validate_pipeline_create(stamp_owner(payload, user_id))

    try:
        pipeline = store.create_pipeline(data)
    except Exception as e:
        logger.error(f"创建管线失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to create pipeline") from e

    logger.info(f"✅ 管线已创建: {pipeline.id} ({pipeline.name})")
    return pipeline


@router.put("/{pipeline_id}", response_model=Pipeline)
async def update_pipeline(
    pipeline_id: int,
    payload: Any = Body(...),
    store: EntityStore = Depends(get_store),
) -> Pipeline:
    """部分更新管线，记录不存在时先返回 404 再校验请求体"""
    try:
        current = store.get_pipeline(pipeline_id)
    except Exception as e:
        logger.error(f"更新管线失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to update pipeline") from e

    if current is None:
        raise _not_found(pipeline_id)

    changes = validate_pipeline_update(payload).changes()

    try:
        pipeline = store.update_pipeline(pipeline_id, changes)
    except Exception as e:
        logger.error(f"更新管线失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to update pipeline") from e

    if pipeline is None:
        raise _not_found(pipeline_id)
    return pipeline


@router.delete(
    "/{pipeline_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_pipeline(
    pipeline_id: int,
    store: EntityStore = Depends(get_store),
) -> Response:
    """删除管线"""
    try:
        deleted = store.delete_pipeline(pipeline_id)
    except Exception as e:
        logger.error(f"删除管线失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete pipeline") from e

    if not deleted:
        raise _not_found(pipeline_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
