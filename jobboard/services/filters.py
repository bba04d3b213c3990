# jobboard/services/filters.py
import logging
from typing import List, Optional

from jobboard.schemas.jobs import JobFilters, SortKey
from jobboard.services.normalize import norm_employment_type

log = logging.getLogger("jobs.filters")


def _clean(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    s = str(raw).strip()
    return s or None


def split_keywords(*raw_lists: Optional[str]) -> List[str]:
    """Comma-separated tokens, trimmed, blanks dropped, case-insensitive dedupe."""
    seen = set()
    out: List[str] = []
    for raw in raw_lists:
        if not raw:
            continue
        for token in str(raw).split(","):
            token = token.strip()
            if not token or token.lower() in seen:
                continue
            seen.add(token.lower())
            out.append(token)
    return out


def normalize_filters(
    *,
    title: Optional[str] = None,
    location: Optional[str] = None,
    keywords: Optional[str] = None,
    q: Optional[str] = None,
    skills: Optional[str] = None,
    job_type: Optional[str] = None,
) -> JobFilters:
    """
    Raw query parameters -> JobFilters.

    Malformed input never raises; it just means no filter on that field.
    `skills` is the older name for `keywords` and is merged into it.
    """
    et = norm_employment_type(job_type)
    if job_type and not et:
        log.debug("ignoring unknown jobType=%r", job_type)

    return JobFilters(
        title=_clean(title),
        location=_clean(location),
        keywords=tuple(split_keywords(keywords, skills)),
        q=_clean(q),
        job_type=et,
        active_only=True,
    )


def parse_sort_key(raw: Optional[str]) -> SortKey:
    s = (raw or "").strip().lower()
    try:
        return SortKey(s)
    except ValueError:
        return SortKey.RECENT
