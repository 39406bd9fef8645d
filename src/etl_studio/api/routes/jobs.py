"""
作业路由

作业只是被记录的执行状态（status、progress、logs），系统不会真正运行管线。
pipelineId 不做存在性检查。
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from loguru import logger

from etl_studio.api.dependencies import get_store
from etl_studio.domain.pipeline.models import Job
from etl_studio.domain.validation import validate_job_create, validate_job_update
from etl_studio.framework.shared.exceptions import NotFoundError
from etl_studio.framework.storage import EntityStore

router = APIRouter(tags=["jobs"])


def _not_found(job_id: int) -> NotFoundError:
    return NotFoundError("Job not found", resource="job", resource_id=job_id)


@router.get("", response_model=list[Job])
async def list_jobs(store: EntityStore = Depends(get_store)) -> list[Job]:
    """列出全部作业"""
    try:
        return store.list_jobs()
    except Exception as e:
        logger.error(f"获取作业列表失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch jobs") from e


@router.get("/pipeline/{pipeline_id}", response_model=list[Job])
async def list_pipeline_jobs(
    pipeline_id: int,
    store: EntityStore = Depends(get_store),
) -> list[Job]:
    """列出某条管线的作业"""
    try:
        return store.list_jobs_by_pipeline(pipeline_id)
    except Exception as e:
        logger.error(f"获取管线作业失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch pipeline jobs") from e


@router.get("/{job_id}", response_model=Job)
async def get_job(job_id: int, store: EntityStore = Depends(get_store)) -> Job:
    """获取单个作业"""
    try:
        job = store.get_job(job_id)
    except Exception as e:
        logger.error(f"获取作业失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch job") from e

    if job is None:
        raise _not_found(job_id)
    return job


@router.post("", response_model=Job, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: Any = Body(...),
    store: EntityStore = Depends(get_store),
) -> Job:
    """创建作业"""
    data = validate_job_create(payload)

    try:
        job = store.create_job(data)
    except Exception as e:
        logger.error(f"创建作业失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to create job") from e

    logger.info(f"✅ 作业已创建: {job.id} (pipeline {job.pipeline_id})")
    return job


@router.put("/{job_id}", response_model=Job)
async def update_job(
    job_id: int,
    payload: Any = Body(...),
    store: EntityStore = Depends(get_store),
) -> Job:
    """部分更新作业"""
    try:
        current = store.get_job(job_id)
    except Exception as e:
        logger.error(f"更新作业失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to update job") from e

    if current is None:
        raise _not_found(job_id)

    changes = validate_job_update(payload).changes()

    try:
        job = store.update_job(job_id, changes)
    except Exception as e:
        logger.error(f"更新作业失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to update job") from e

    if job is None:
        raise _not_found(job_id)
    return job


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_job(job_id: int, store: EntityStore = Depends(get_store)) -> Response:
    """删除作业"""
    try:
        deleted = store.delete_job(job_id)
    except Exception as e:
        logger.error(f"删除作业失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete job") from e

    if not deleted:
        raise _not_found(job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
