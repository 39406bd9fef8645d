"""
API 依赖注入

- get_store: 取应用生命周期内的 EntityStore（在 create_app 中构造并挂到 app.state）
- get_current_user_id: 会话尚未实现，固定返回默认用户
- stamp_owner: 创建归属实体时写入当前用户
"""

from typing import Any

from fastapi import Request

from etl_studio.framework.storage import DEFAULT_USER_ID, EntityStore


def get_store(request: Request) -> EntityStore:
    """获取当前应用的实体存储"""
    return request.app.state.store


def get_current_user_id() -> int:
    """当前用户 id（认证未实现，所有权只是标记）"""
    return DEFAULT_USER_ID


def stamp_owner(payload: Any, user_id: int) -> Any:
    """用服务端用户 id 覆盖请求体中的 userId"""
    if not isinstance(payload, dict):
        return payload
    stamped = {key: value for key, value in payload.items() if key not in ("userId", "user_id")}
    stamped["userId"] = user_id
    return stamped
