from .models import (
    Job,
    JobCreate,
    JobStatus,
    JobUpdate,
    Pipeline,
    PipelineConfiguration,
    PipelineCreate,
    PipelineStatus,
    PipelineUpdate,
    Schedule,
    ScheduleCreate,
    ScheduleUpdate,
)

__all__ = [
    "Pipeline", "PipelineCreate", "PipelineUpdate", "PipelineStatus", "PipelineConfiguration",
    "Job", "JobCreate", "JobUpdate", "JobStatus",
    "Schedule", "ScheduleCreate", "ScheduleUpdate",
]
