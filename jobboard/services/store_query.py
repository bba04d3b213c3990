# jobboard/services/store_query.py
import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql.elements import ColumnElement

from jobboard.models import Job, JobSkill
from jobboard.schemas.jobs import JobFilters, JobRecord, JobStats, SortKey, StatsBucket
from jobboard.services.normalize import norm_employment_type
from jobboard.services.pagination import PageRequest
from jobboard.services.sanitize import fold, folded_like
from jobboard.services.sorting import store_order_by

log = logging.getLogger("jobs.store")


def _skill_contains(term: str):
    return Job.skills.any(folded_like(JobSkill.name, term))


def _skill_is(term: str):
    return Job.skills.any(func.lower(JobSkill.name) == fold(term))


def build_store_conditions(filters: JobFilters) -> List[ColumnElement]:
    """JobFilters -> list of WHERE conditions (ANDed by the caller)."""
    conds: List[ColumnElement] = []

    if filters.active_only:
        conds.append(Job.is_active.is_(True))

    if filters.title:
        conds.append(folded_like(Job.title, filters.title))

    if filters.location:
        conds.append(folded_like(Job.location, filters.location))

    # any-of: a keyword equals a skill tag or appears in the description
    if filters.keywords:
        conds.append(or_(*[
            or_(_skill_is(k), folded_like(Job.description, k))
            for k in filters.keywords
        ]))

    if filters.job_type:
        conds.append(Job.job_type == filters.job_type)

    if filters.q:
        q = filters.q
        conds.append(or_(
            folded_like(Job.title, q),
            folded_like(Job.company, q),
            folded_like(Job.location, q),
            folded_like(Job.description, q),
            _skill_contains(q),
        ))

    return conds


def to_record(row: Job) -> JobRecord:
    """ORM row -> canonical JobRecord (must run while the session is open)."""
    return JobRecord(
        id=row.id,
        title=row.title,
        description=row.description,
        company=row.company,
        location=row.location,
        salary_min=row.salary_min,
        salary_max=row.salary_max,
        salary=row.salary_text,
        job_type=norm_employment_type(row.job_type),
        skills=tuple(s.name for s in row.skills),
        created_at=row.created_at,
        is_active=bool(row.is_active),
    )


class StoreJobBackend:
    """Reads jobs from the SQL store. One session per query, each on a worker thread."""

    name = "store"

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    async def _run(self, fn, *args):
        def work():
            db = self._session_factory()
            try:
                return fn(db, *args)
            finally:
                db.close()
        return await run_in_threadpool(work)

    # ---- queries (sync, called on worker threads) ----
    @staticmethod
    def _fetch_page(db: Session, filters: JobFilters, sort_key: SortKey, page: PageRequest) -> List[JobRecord]:
        rows = (
            db.query(Job)
            .options(selectinload(Job.skills))
            .filter(*build_store_conditions(filters))
            .order_by(*store_order_by(sort_key, filters))
            .offset(page.offset)
            .limit(page.limit)
            .all()
        )
        return [to_record(r) for r in rows]

    @staticmethod
    def _count(db: Session, filters: JobFilters) -> int:
        return db.query(func.count(Job.id)).filter(*build_store_conditions(filters)).scalar() or 0

    @staticmethod
    def _fetch_one(db: Session, job_id: str) -> Optional[JobRecord]:
        row = db.query(Job).options(selectinload(Job.skills)).filter(Job.id == job_id).first()
        return to_record(row) if row else None

    @staticmethod
    def _top_values(db: Session, column, top_n: int) -> List[StatsBucket]:
        n = func.count(Job.id)
        rows = (
            db.query(column, n)
            .filter(Job.is_active.is_(True), column.isnot(None), func.trim(column) != "")
            .group_by(column)
            .order_by(n.desc(), column.asc())
            .limit(top_n)
            .all()
        )
        return [StatsBucket(value=value, count=count) for value, count in rows]

    # ---- public async API ----
    async def list_page(self, filters: JobFilters, sort_key: SortKey, page: PageRequest) -> Tuple[List[JobRecord], int]:
        # independent reads; metadata needs both, so wait for both
        items, total = await asyncio.gather(
            self._run(self._fetch_page, filters, sort_key, page),
            self._run(self._count, filters),
        )
        log.info("STORE: returning %d jobs (page=%d, limit=%d, total=%d)", len(items), page.page, page.limit, total)
        return items, total

    async def get(self, job_id: str) -> Optional[JobRecord]:
        return await self._run(self._fetch_one, job_id)

    async def stats(self, top_n: int) -> JobStats:
        active = JobFilters()
        total, locations, companies = await asyncio.gather(
            self._run(self._count, active),
            self._run(self._top_values, Job.location, top_n),
            self._run(self._top_values, Job.company, top_n),
        )
        return JobStats(total=total, top_locations=locations, top_companies=companies)
