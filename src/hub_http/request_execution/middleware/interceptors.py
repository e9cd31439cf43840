# Wrap the downstream call and may answer without calling it: GET response caching
import asyncio
import logging
import time
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterator

from hub_http.request_execution.models import HttpResponse, RequestContext, RequestType
from hub_http.request_execution.middleware.pipeline import (
    NEXT_CALL,
    Middleware,
    MiddlewareFactory,
    MiddlewareType,
)


DEFAULT_TTL_SECONDS = 5 * 60
DEFAULT_BUST_HEADER = "X-Refresh"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """
    Either an in-flight call (task set, response None) that identical requests
    share, or a settled response. `timestamp` comes from the cache clock.
    """
    timestamp: float
    task: "asyncio.Task[HttpResponse] | None" = None
    response: HttpResponse | None = None

    @property
    def pending(self) -> bool:
        return self.response is None


class ResponseCache:
    """
    Keyed store of GET responses and in-flight GET calls.

    Entries expire `ttl_seconds` after they were stored. A failed or cancelled
    call is removed as soon as it settles, so failures are never replayed.
    Only the entry currently stored under a key may settle it: a call that was
    superseded by a cache-busting request leaves the newer entry alone.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        bust_header: str = DEFAULT_BUST_HEADER,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        if not bust_header.strip():
            raise ValueError("bust_header must not be empty")

        self.ttl_seconds = float(ttl_seconds)
        self.bust_header = bust_header
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @staticmethod
    def cache_key(request: RequestContext) -> str:
        return f"{request.method.value} {request.url_with_params}"

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def is_bust_requested(self, request: RequestContext) -> bool:
        value = request.headers.get(self.bust_header)
        return value is not None and value.strip().lower() == "true"

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.timestamp < self.ttl_seconds

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def lookup(self, key: str) -> CacheEntry | None:
        """Return the live entry for `key`, evicting it first if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self.is_fresh(entry):
            return entry

        logger.debug(f"[ResponseCache] evicting expired entry {key}")
        del self._entries[key]
        return None

    def store_pending(self, key: str, task: "asyncio.Task[HttpResponse]") -> CacheEntry:
        entry = CacheEntry(timestamp=self._clock(), task=task)
        self._entries[key] = entry
        task.add_done_callback(partial(self._settle, key, entry))
        return entry

    def store(self, key: str, response: HttpResponse) -> CacheEntry:
        entry = CacheEntry(timestamp=self._clock(), response=response)
        self._entries[key] = entry
        return entry

    def _settle(self, key: str, entry: CacheEntry, task: "asyncio.Task[HttpResponse]") -> None:
        failed = task.cancelled() or task.exception() is not None

        if self._entries.get(key) is not entry:
            return

        if failed:
            logger.debug(f"[ResponseCache] dropping failed request {key}")
            del self._entries[key]
            return

        response = task.result()
        if not response.ok:
            del self._entries[key]
            return

        self.store(key, response)

    def invalidate(self, url: str, method: RequestType = RequestType.GET) -> int:
        """
        Remove the entries for `url`, including every query-string variant.
        Returns the number of entries removed.
        """
        exact = f"{method.value} {url}"
        prefix = f"{exact}?"
        stale = [key for key in self._entries if key == exact or key.startswith(prefix)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def purge_expired(self) -> int:
        expired = [key for key, entry in self._entries.items() if not self.is_fresh(entry)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()


@MiddlewareFactory.register(MiddlewareType.CACHE)
class CacheMiddleware(Middleware):
    """
    Caches successful GET responses and deduplicates identical in-flight GETs.

    On a miss the downstream call is wrapped in a task and stored in the cache
    before anything is awaited, so a second identical request arriving while
    the first is outstanding awaits the same task instead of calling the
    transport again. Callers await the task through asyncio.shield: one caller
    being cancelled does not cancel the call the others are waiting on.
    """

    def __init__(self, cache: ResponseCache | None = None) -> None:
        self.cache = cache if cache is not None else ResponseCache()

    async def __call__(self, request: RequestContext, next_call: NEXT_CALL) -> HttpResponse:
        if request.method is not RequestType.GET:
            return await next_call(request)

        refresh = self.cache.is_bust_requested(request)
        request = request.without_headers(self.cache.bust_header)
        key = self.cache.cache_key(request)

        # lookup and store_pending must run without an await in between
        entry = None if refresh else self.cache.lookup(key)

        if entry is None:
            logger.debug(f"[CacheMiddleware] {'refresh' if refresh else 'miss'} {key}")
            task = asyncio.ensure_future(next_call(request))
            entry = self.cache.store_pending(key, task)
        elif entry.response is not None:
            logger.debug(f"[CacheMiddleware] hit {key}")
            return entry.response
        else:
            logger.debug(f"[CacheMiddleware] joining in-flight request {key}")

        return await asyncio.shield(entry.task)
