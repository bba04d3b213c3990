# jobboard/routes/jobs.py
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from typing import Optional
import logging
import traceback

from jobboard.config import IS_DEV
from jobboard.middleware.auth_middleware import optional_user_id
from jobboard.schemas.jobs import JobDetailResponse, JobListResponse, JobStatsResponse
from jobboard.services.job_query import InvalidJobId, JobNotFound, JobQueryService
from jobboard.services.search_tracker import SearchTerms, track_search_safely

log = logging.getLogger("routes.jobs")

# NOTE: Do NOT set a prefix here since main.py already includes this router with prefix="/api/v1"
router = APIRouter()


def get_job_query_service(request: Request) -> JobQueryService:
    return request.app.state.job_query


def get_search_tracker(request: Request):
    return request.app.state.search_tracker


def _server_error(message: str) -> HTTPException:
    detail = {"message": message}
    if IS_DEV:
        detail["trace"] = traceback.format_exc()
    return HTTPException(status_code=500, detail=detail)


@router.get("/jobs", response_model=JobListResponse, tags=["Jobs"])
async def list_jobs(
    background_tasks: BackgroundTasks,
    title: Optional[str] = Query(None, description="Substring of the job title"),
    location: Optional[str] = Query(None, description="Substring of the location"),
    keywords: Optional[str] = Query(None, description="Comma-separated, any-of against skills/description"),
    skills: Optional[str] = Query(None, description="Older name for keywords; merged into it"),
    q: Optional[str] = Query(None, description="Matches title, company, location, description or skills"),
    job_type: Optional[str] = Query(None, alias="jobType", description="full-time | part-time | contract | freelance | internship | temporary"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="recent | relevant | salary_high | salary_low"),
    # raw strings on purpose: bad paging input clamps instead of 422
    page: Optional[str] = Query(None, description="1-based page index"),
    limit: Optional[str] = Query(None, description="items per page (max 50)"),
    service: JobQueryService = Depends(get_job_query_service),
    tracker=Depends(get_search_tracker),
    user_id: Optional[str] = Depends(optional_user_id),
):
    """
    Public job listing:
    - Structured store first, fallback dataset if the store errors
    - Filters, sort and pagination behave the same on both paths
    - `servedFromFallback` tells which path answered
    """
    result = await service.list_jobs(
        title=title,
        location=location,
        keywords=keywords,
        q=q,
        skills=skills,
        job_type=job_type,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )

    if not result.success:
        return JSONResponse(status_code=500, content=result.model_dump(mode="json", by_alias=True))

    f = result.filters
    if user_id and (f.q or f.title or f.location or f.keywords):
        background_tasks.add_task(
            track_search_safely,
            tracker,
            user_id,
            SearchTerms(
                term=f.q or "",
                title=f.title or "",
                location=f.location or "",
                skills=",".join(f.keywords),
            ),
        )
    return result


# MUST be before /jobs/{job_id}
@router.get("/jobs/stats/summary", response_model=JobStatsResponse, tags=["Jobs"])
async def jobs_stats_summary(service: JobQueryService = Depends(get_job_query_service)):
    try:
        return await service.stats_summary()
    except Exception:
        log.exception("jobs_stats_summary failed")
        raise _server_error("Error fetching job stats")


@router.get("/jobs/{job_id}", response_model=JobDetailResponse, tags=["Jobs"])
async def get_job(job_id: str, service: JobQueryService = Depends(get_job_query_service)):
    try:
        return await service.get_job(job_id)
    except InvalidJobId:
        raise HTTPException(status_code=400, detail="Invalid job id format")
    except JobNotFound:
        raise HTTPException(status_code=404, detail="Job not found")
    except Exception:
        log.exception("get_job failed id=%s", job_id)
        raise _server_error("Error fetching job")
