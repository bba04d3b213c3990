# jobboard/services/pagination.py
import math
from dataclasses import dataclass
from typing import Any

from jobboard.schemas.jobs import PageMeta

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


def _to_int(raw: Any, default: int) -> int:
    if raw is None or isinstance(raw, bool):
        return default
    try:
        return int(float(str(raw).strip()))
    except (TypeError, ValueError, OverflowError):
        return default


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> PageMeta:
        total = max(0, int(total))
        total_pages = math.ceil(total / self.limit) if total else 0
        return PageMeta(
            page=self.page,
            limit=self.limit,
            total=total,
            total_pages=total_pages,
            has_next_page=self.page < total_pages,
            has_prev_page=self.page > 1,
        )


def paginate(page: Any = None, limit: Any = None, *, default_limit: int = DEFAULT_LIMIT,
             max_limit: int = MAX_LIMIT) -> PageRequest:
    """Clamp page to >= 1 and limit to [1, max_limit]; garbage -> defaults."""
    max_limit = max(1, int(max_limit))
    default_limit = min(max(1, int(default_limit)), max_limit)
    p = max(1, _to_int(page, 1))
    n = min(max(1, _to_int(limit, default_limit)), max_limit)
    return PageRequest(page=p, limit=n)
