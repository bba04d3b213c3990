# jobboard/services/search_tracker.py
import logging
from dataclasses import asdict, dataclass
from typing import Optional

import httpx

log = logging.getLogger("jobs.tracker")


@dataclass(frozen=True)
class SearchTerms:
    term: str = ""
    title: str = ""
    location: str = ""
    skills: str = ""


class NullSearchTracker:
    """Used when no recommender is configured."""

    async def track(self, user_id: str, terms: SearchTerms) -> None:
        log.debug("search tracking disabled; user=%s term=%r", user_id, terms.term)


class HttpSearchTracker:
    """Posts search terms to the recommendation service."""

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = f"{base_url.rstrip('/')}/search-history"
        self.timeout = timeout
        self._transport = transport

    async def track(self, user_id: str, terms: SearchTerms) -> None:
        payload = {"userId": user_id, **asdict(terms)}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.post(self.url, json=payload)
            r.raise_for_status()


async def track_search_safely(tracker, user_id: str, terms: SearchTerms) -> None:
    """Fire-and-forget wrapper: tracking failures never reach the caller."""
    try:
        await tracker.track(user_id, terms)
    except Exception as e:
        log.warning("search tracking failed for user=%s: %s", user_id, e)
