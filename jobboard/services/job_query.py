# jobboard/services/job_query.py
import logging
import traceback
from typing import Optional

from jobboard.schemas.jobs import (
    JobDetailResponse, JobFilters, JobListResponse, JobStatsResponse, SortKey
)
from jobboard.services.dataset import FallbackDataset, is_valid_job_id
from jobboard.services.fallback import FallbackCoordinator
from jobboard.services.filters import normalize_filters, parse_sort_key
from jobboard.services.memory_query import MemoryJobBackend
from jobboard.services.pagination import DEFAULT_LIMIT, MAX_LIMIT, paginate
from jobboard.services.store_query import StoreJobBackend

log = logging.getLogger("jobs.query")

SAFE_LIST_ERROR = "Error fetching jobs"


class JobQueryError(Exception):
    """Base for user-facing query errors."""


class InvalidJobId(JobQueryError):
    pass


class JobNotFound(JobQueryError):
    pass


class JobQueryService:
    """
    Entry point for job reads: list, get by id, stats.

    Every read goes to the structured store first and degrades to the
    fallback dataset when the store raises. Filters are parsed once and
    handed unchanged to whichever backend answers.
    """

    def __init__(
        self,
        store: StoreJobBackend,
        dataset: FallbackDataset,
        *,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
        stats_top_n: int = 10,
        expose_errors: bool = False,
    ):
        self.store = store
        self.dataset = dataset
        self.memory = MemoryJobBackend(dataset.records)
        self.coordinator = FallbackCoordinator(fallback_available=dataset.loaded)
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.stats_top_n = stats_top_n
        self.expose_errors = expose_errors

    async def list_jobs(
        self,
        *,
        title: Optional[str] = None,
        location: Optional[str] = None,
        keywords: Optional[str] = None,
        q: Optional[str] = None,
        skills: Optional[str] = None,
        job_type: Optional[str] = None,
        sort_by: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> JobListResponse:
        """Never raises; failures come back as an error envelope with no items."""
        filters = JobFilters()
        sort_key = SortKey.RECENT
        page_req = paginate(None, None, default_limit=self.default_limit, max_limit=self.max_limit)
        try:
            filters = normalize_filters(
                title=title, location=location, keywords=keywords, q=q, skills=skills, job_type=job_type,
            )
            sort_key = parse_sort_key(sort_by)
            page_req = paginate(page, limit, default_limit=self.default_limit, max_limit=self.max_limit)

            log.info(
                "LIST q='%s' title='%s' loc='%s' keywords=%s type=%s sort=%s page=%s limit=%s",
                filters.q, filters.title, filters.location, list(filters.keywords),
                filters.job_type, sort_key.value, page_req.page, page_req.limit,
            )

            served = await self.coordinator.run(
                "list_jobs", self.store.list_page, self.memory.list_page, filters, sort_key, page_req,
            )
            items, total = served.value
            meta = page_req.meta(total)
            return JobListResponse(
                items=items,
                total=meta.total,
                page=meta.page,
                limit=meta.limit,
                total_pages=meta.total_pages,
                has_next_page=meta.has_next_page,
                has_prev_page=meta.has_prev_page,
                sort_by=sort_key,
                filters=filters,
                served_from_fallback=served.from_fallback,
            )
        except Exception:
            log.exception("list_jobs failed")
            return JobListResponse(
                success=False,
                page=page_req.page,
                limit=page_req.limit,
                sort_by=sort_key,
                filters=filters,
                message=SAFE_LIST_ERROR,
                detail=traceback.format_exc() if self.expose_errors else None,
            )

    async def get_job(self, job_id: str) -> JobDetailResponse:
        """Raises InvalidJobId before touching storage, JobNotFound when absent."""
        if not is_valid_job_id(job_id):
            raise InvalidJobId("Invalid job id format")
        job_id = job_id.lower()

        served = await self.coordinator.run("get_job", self.store.get, self.memory.get, job_id)
        if served.value is None:
            raise JobNotFound("Job not found")
        return JobDetailResponse(job=served.value, served_from_fallback=served.from_fallback)

    async def stats_summary(self, top_n: Optional[int] = None) -> JobStatsResponse:
        n = top_n or self.stats_top_n
        served = await self.coordinator.run("stats_summary", self.store.stats, self.memory.stats, n)
        return JobStatsResponse(**served.value.model_dump(), served_from_fallback=served.from_fallback)
