# jobboard/schemas/__init__.py
from jobboard.schemas.jobs import (
    JobDetailResponse,
    JobFilters,
    JobListResponse,
    JobRecord,
    JobStats,
    JobStatsResponse,
    JobType,
    PageMeta,
    SortKey,
    StatsBucket,
)

__all__ = [
    "JobDetailResponse", "JobFilters", "JobListResponse", "JobRecord",
    "JobStats", "JobStatsResponse", "JobType", "PageMeta", "SortKey", "StatsBucket",
]
