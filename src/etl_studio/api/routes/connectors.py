"""
连接器路由

除增删改查外提供 POST /{id}/test：模拟连通性测试，
结果随机产生并写回连接器的 status / lastTested，不会真正连接外部系统。
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from loguru import logger

from etl_studio.api.dependencies import get_current_user_id, get_store, stamp_owner
from etl_studio.domain.connectors.models import Connector, ConnectorTestResult
from etl_studio.domain.validation import validate_connector_create, validate_connector_update
from etl_studio.framework.shared.exceptions import NotFoundError
from etl_studio.framework.storage import EntityStore

router = APIRouter(tags=["connectors"])


def _not_found(connector_id: int) -> NotFoundError:
    return NotFoundError("Connector not found", resource="connector", resource_id=connector_id)


@router.get("", response_model=list[Connector])
async def list_connectors(
    store: EntityStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> list[Connector]:
    """列出当前用户的连接器"""
    try:
        return store.list_connectors(user_id)
    except Exception as e:
        logger.error(f"获取连接器列表失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch connectors") from e


@router.get("/{connector_id}", response_model=Connector)
async def get_connector(
    connector_id: int,
    store: EntityStore = Depends(get_store),
) -> Connector:
    """获取单个连接器"""
    try:
        connector = store.get_connector(connector_id)
    except Exception as e:
        logger.error(f"获取连接器失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch connector") from e

    if connector is None:
        raise _not_found(connector_id)
    return connector


@router.post("", response_model=Connector, status_code=status.HTTP_201_CREATED)
async def create_connector(
    payload: Any = Body(...),
    store: EntityStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> Connector:
    """创建连接器，configuration 按 type 校验"""
    data = validate_connector_create(stamp_owner(payload, user_id))

    try:
        connector = store.create_connector(data)
    except Exception as e:
        logger.error(f"创建连接器失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to create connector") from e

    logger.info(f"✅ 连接器已创建: {connector.id} ({connector.type})")
    return connector


@router.post("/{connector_id}/test", response_model=ConnectorTestResult)
async def test_connector(
    connector_id: int,
    store: EntityStore = Depends(get_store),
) -> ConnectorTestResult:
    """
    模拟连接测试

    连接器不存在时返回 success=false、connector=null。
    """
    try:
        success = store.test_connector(connector_id)
        connector = store.get_connector(connector_id)
    except Exception as e:
        logger.error(f"连接器测试失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to test connector") from e

    return ConnectorTestResult(success=success, connector=connector)


@router.put("/{connector_id}", response_model=Connector)
async def update_connector(
    connector_id: int,
    payload: Any = Body(...),
    store: EntityStore = Depends(get_store),
) -> Connector:
    """部分更新连接器"""
    try:
        current = store.get_connector(connector_id)
    except Exception as e:
        logger.error(f"更新连接器失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to update connector") from e

    if current is None:
        raise _not_found(connector_id)

    changes = validate_connector_update(
        payload, current.type, current.configuration
    ).changes()

    try:
        connector = store.update_connector(connector_id, changes)
    except Exception as e:
        logger.error(f"更新连接器失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to update connector") from e

    if connector is None:
        raise _not_found(connector_id)
    return connector


@router.delete(
    "/{connector_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_connector(
    connector_id: int,
    store: EntityStore = Depends(get_store),
) -> Response:
    """删除连接器"""
    try:
        deleted = store.delete_connector(connector_id)
    except Exception as e:
        logger.error(f"删除连接器失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete connector") from e

    if not deleted:
        raise _not_found(connector_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
