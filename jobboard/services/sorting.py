# jobboard/services/sorting.py
"""
Sort strategies, rendered once per backend.

    recent       created_at desc, id asc
    salary_high  max(salary_max, salary_min, 0) desc, then recent
    salary_low   salary_min, else salary_max, else NO_SALARY asc, then recent
    relevant     weighted substring score against `q` desc, then recent

`store_order_by` gives the ORDER BY clause for the structured store and
`memory_sort_key` the equivalent Python key; both must agree row for row.
"""
import re
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.sql.elements import ColumnElement

from jobboard.models import Job, JobSkill
from jobboard.schemas.jobs import JobFilters, JobRecord, SortKey
from jobboard.services.sanitize import compile_matcher, contains, fold, folded_like

# Larger than any real salary, so records without one sort last ascending
NO_SALARY = 10 ** 15

# Relevance weights, per field containing `q`
W_TITLE_EXACT = 8
W_TITLE = 8
W_SKILL = 4
W_COMPANY = 2
W_LOCATION = 2
W_DESCRIPTION = 1

_EPOCH = datetime(1970, 1, 1)
_MICRO = timedelta(microseconds=1)


# ---------------------------
# In-memory
# ---------------------------
def _recent_key(job: JobRecord) -> Tuple[int, str]:
    return -((job.created_at - _EPOCH) // _MICRO), job.id


def salary_high_value(job: JobRecord) -> int:
    return max(job.salary_max or 0, job.salary_min or 0, 0)


def salary_low_value(job: JobRecord) -> int:
    if job.salary_min is not None:
        return job.salary_min
    if job.salary_max is not None:
        return job.salary_max
    return NO_SALARY


def relevance_score(job: JobRecord, q: Optional[str], pat: Optional[re.Pattern] = None) -> int:
    if not q:
        return 0
    pat = pat or compile_matcher(q)
    score = 0
    if fold(job.title) == fold(q):
        score += W_TITLE_EXACT
    if contains(pat, job.title):
        score += W_TITLE
    if any(contains(pat, s) for s in job.skills):
        score += W_SKILL
    if contains(pat, job.company):
        score += W_COMPANY
    if contains(pat, job.location):
        score += W_LOCATION
    if contains(pat, job.description):
        score += W_DESCRIPTION
    return score


def memory_sort_key(sort_key: SortKey, filters: JobFilters) -> Callable[[JobRecord], tuple]:
    if sort_key == SortKey.SALARY_HIGH:
        return lambda j: (-salary_high_value(j),) + _recent_key(j)
    if sort_key == SortKey.SALARY_LOW:
        return lambda j: (salary_low_value(j),) + _recent_key(j)
    if sort_key == SortKey.RELEVANT and filters.q:
        q = filters.q
        pat = compile_matcher(q)
        return lambda j: (-relevance_score(j, q, pat),) + _recent_key(j)
    return _recent_key


def sort_records(records, sort_key: SortKey, filters: JobFilters) -> List[JobRecord]:
    return sorted(records, key=memory_sort_key(sort_key, filters))


# ---------------------------
# Structured store
# ---------------------------
def _recent_clause() -> List[ColumnElement]:
    return [Job.created_at.desc(), Job.id.asc()]


def relevance_expr(q: str) -> ColumnElement:
    return (
        case((func.lower(Job.title) == fold(q), W_TITLE_EXACT), else_=0)
        + case((folded_like(Job.title, q), W_TITLE), else_=0)
        + case((Job.skills.any(folded_like(JobSkill.name, q)), W_SKILL), else_=0)
        + case((folded_like(Job.company, q), W_COMPANY), else_=0)
        + case((folded_like(Job.location, q), W_LOCATION), else_=0)
        + case((folded_like(Job.description, q), W_DESCRIPTION), else_=0)
    )


def store_order_by(sort_key: SortKey, filters: JobFilters) -> List[ColumnElement]:
    if sort_key == SortKey.SALARY_HIGH:
        smax = func.coalesce(Job.salary_max, 0)
        smin = func.coalesce(Job.salary_min, 0)
        high = case((smax >= smin, smax), else_=smin)
        high = case((high > 0, high), else_=0)
        return [high.desc()] + _recent_clause()
    if sort_key == SortKey.SALARY_LOW:
        low = func.coalesce(Job.salary_min, Job.salary_max, NO_SALARY)
        return [low.asc()] + _recent_clause()
    if sort_key == SortKey.RELEVANT and filters.q:
        return [relevance_expr(filters.q).desc()] + _recent_clause()
    return _recent_clause()
