# jobboard/services/fallback.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, TypeVar

log = logging.getLogger("jobs.fallback")

T = TypeVar("T")


class FallbackState(str, Enum):
    PRIMARY_ATTEMPT = "primary_attempt"
    FALLBACK_SERVED = "fallback_served"


@dataclass(frozen=True)
class Served(Generic[T]):
    value: T
    state: FallbackState

    @property
    def from_fallback(self) -> bool:
        return self.state is FallbackState.FALLBACK_SERVED


class FallbackCoordinator:
    """
    Try the structured store once; on any exception answer from the
    in-memory dataset with the same arguments. Decided once per call,
    the store is not retried.
    """

    def __init__(self, fallback_available: bool = True):
        self.fallback_available = fallback_available

    async def run(
        self,
        operation: str,
        primary: Callable[..., Awaitable[T]],
        fallback: Callable[..., T],
        *args: Any,
    ) -> Served[T]:
        try:
            return Served(await primary(*args), FallbackState.PRIMARY_ATTEMPT)
        except Exception as e:
            if not self.fallback_available:
                raise
            log.warning("%s: structured store failed (%s: %s); serving from fallback dataset",
                        operation, type(e).__name__, e)
        return Served(fallback(*args), FallbackState.FALLBACK_SERVED)
