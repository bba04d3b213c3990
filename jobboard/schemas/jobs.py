from datetime import datetime
from enum import Enum
from typing import Optional, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Normalized job types (see services.normalize.ET_MAP)
JobType = Literal["full-time", "part-time", "contract", "freelance", "internship", "temporary"]


class SortKey(str, Enum):
    RECENT = "recent"
    RELEVANT = "relevant"
    SALARY_HIGH = "salary_high"
    SALARY_LOW = "salary_low"


class _CamelModel(BaseModel):
    # Responses go out as camelCase (totalPages, hasNextPage, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobRecord(_CamelModel):
    """Canonical job shape; both backends normalize into this."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary: Optional[str] = None                     # raw display text ("$80k - $100k")
    job_type: Optional[JobType] = None
    skills: Tuple[str, ...] = ()
    created_at: datetime
    is_active: bool = True


class JobFilters(_CamelModel):
    """Backend-agnostic filters, built once per request and shared by both backends."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: Optional[str] = None
    location: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    q: Optional[str] = None
    job_type: Optional[JobType] = None
    active_only: bool = True


class PageMeta(_CamelModel):
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_next_page: bool
    has_prev_page: bool


class JobListResponse(_CamelModel):
    success: bool = True
    items: List[JobRecord] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 1
    total_pages: int = 0
    has_next_page: bool = False
    has_prev_page: bool = False
    sort_by: SortKey = SortKey.RECENT
    filters: JobFilters = Field(default_factory=JobFilters)
    served_from_fallback: bool = False
    message: Optional[str] = None
    detail: Optional[str] = None                     # traceback, dev only


class JobDetailResponse(_CamelModel):
    job: JobRecord
    served_from_fallback: bool = False


class StatsBucket(_CamelModel):
    value: str
    count: int


class JobStats(_CamelModel):
    total: int = 0
    top_locations: List[StatsBucket] = Field(default_factory=list)
    top_companies: List[StatsBucket] = Field(default_factory=list)


class JobStatsResponse(JobStats):
    served_from_fallback: bool = False
