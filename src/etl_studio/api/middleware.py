"""
API 中间件

- 请求日志：为每个请求分配 request_id，记录方法、路径、状态码与耗时
- 响应头：X-Request-ID、X-Process-Time
- request_id 绑定到 structlog 上下文，存储层日志自动携带
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from loguru import logger

from etl_studio.framework.shared.logging import bind_context, clear_context


async def log_requests(request: Request, call_next: Callable) -> Response:
    """
    请求日志中间件

    记录所有请求的详细信息，包括请求方法、路径、响应时间等
    """
    start_time = time.time()
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    bind_context(request_id=request_id)

    logger.info(
        f"📤 [REQ-{request_id}] {request.method} {request.url.path} "
        f"from {request.client.host if request.client else 'unknown'}"
    )

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"💥 [REQ-{request_id}] {request.method} {request.url.path} "
            f"失败: {e} ({process_time:.4f}s)"
        )
        raise
    finally:
        clear_context()

    process_time = time.time() - start_time
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = f"{process_time:.4f}"

    logger.info(
        f"📥 [REQ-{request_id}] {request.method} {request.url.path} "
        f"→ {response.status_code} ({process_time:.4f}s)"
    )
    return response
