# jobboard/services/memory_query.py
"""
In-memory rendering of the job predicate, used against the fallback dataset.

Must accept exactly the rows `store_query.build_store_conditions` accepts for
the same JobFilters; the shared parity tests pin that down.
"""
import logging
from collections import Counter
from typing import Callable, List, Optional, Sequence, Tuple

from jobboard.schemas.jobs import JobFilters, JobRecord, JobStats, SortKey, StatsBucket
from jobboard.services.pagination import PageRequest
from jobboard.services.sanitize import compile_matcher, contains, fold
from jobboard.services.sorting import sort_records

log = logging.getLogger("jobs.memory")

Predicate = Callable[[JobRecord], bool]


def _any_skill(pattern, job: JobRecord) -> bool:
    return any(contains(pattern, s) for s in job.skills)


def _has_skill(folded: str, job: JobRecord) -> bool:
    return any(fold(s) == folded for s in job.skills)


def build_memory_predicate(filters: JobFilters) -> Predicate:
    """JobFilters -> predicate over JobRecord."""
    checks: List[Predicate] = []

    if filters.active_only:
        checks.append(lambda j: j.is_active is True)

    if filters.title:
        title_re = compile_matcher(filters.title)
        checks.append(lambda j: contains(title_re, j.title))

    if filters.location:
        location_re = compile_matcher(filters.location)
        checks.append(lambda j: contains(location_re, j.location))

    # any-of: a keyword equals a skill tag or appears in the description
    if filters.keywords:
        keyword_checks = [(fold(k), compile_matcher(k)) for k in filters.keywords]
        checks.append(lambda j: any(
            _has_skill(k, j) or contains(p, j.description) for k, p in keyword_checks
        ))

    if filters.job_type:
        job_type = filters.job_type
        checks.append(lambda j: j.job_type == job_type)

    if filters.q:
        q_re = compile_matcher(filters.q)
        checks.append(lambda j: (
            contains(q_re, j.title)
            or contains(q_re, j.company)
            or contains(q_re, j.location)
            or contains(q_re, j.description)
            or _any_skill(q_re, j)
        ))

    return lambda job: all(check(job) for check in checks)


def _top_values(values, top_n: int) -> List[StatsBucket]:
    counts = Counter(v for v in values if v is not None and v.strip(" ") != "")
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [StatsBucket(value=v, count=n) for v, n in ranked[:top_n]]


class MemoryJobBackend:
    """Evaluates queries over an immutable sequence of JobRecords. No I/O."""

    name = "memory"

    def __init__(self, records: Sequence[JobRecord]):
        self._records = records
        self._by_id = {r.id: r for r in records}

    def __len__(self) -> int:
        return len(self._records)

    def filter(self, filters: JobFilters) -> List[JobRecord]:
        pred = build_memory_predicate(filters)
        return [r for r in self._records if pred(r)]

    def list_page(self, filters: JobFilters, sort_key: SortKey, page: PageRequest) -> Tuple[List[JobRecord], int]:
        matched = sort_records(self.filter(filters), sort_key, filters)
        items = matched[page.offset:page.offset + page.limit]
        log.info("MEMORY: returning %d jobs (page=%d, limit=%d, total=%d)", len(items), page.page, page.limit, len(matched))
        return items, len(matched)

    def get(self, job_id: str) -> Optional[JobRecord]:
        return self._by_id.get(job_id)

    def stats(self, top_n: int) -> JobStats:
        active = self.filter(JobFilters())
        return JobStats(
            total=len(active),
            top_locations=_top_values((j.location for j in active), top_n),
            top_companies=_top_values((j.company for j in active), top_n),
        )
