import logging
from typing import Any

from hub_http.auth.token.token_store import TokenProvider
from hub_http.events.bus import EventBus
from hub_http.request_execution.loading import LoadingTracker
from hub_http.request_execution.models import HttpResponse, RequestContext, RequestType
from hub_http.request_execution.transport.base import TransportEngine
from hub_http.request_execution.middleware.common import BaseUrlSource, is_absolute_url, join_url
from hub_http.request_execution.middleware.interceptors import ResponseCache
from hub_http.request_execution.middleware.pipeline import (
    MiddlewareFactory,
    MiddlewarePipeline,
    MiddlewareType,
)
# registers the listener middleware with MiddlewareFactory
import hub_http.request_execution.middleware.listeners  # noqa: F401


# Outermost first. Reordering changes observable behaviour:
# • ERROR_HANDLING wraps everything so it sees failures from every stage.
# • BEARER runs before CACHE, so the cache key is built from an authorized
#   request but the Authorization header is not part of the key.
# • CACHE runs before LOADING, so a request answered from the cache never
#   touches the loading counter, while callers joining an in-flight request
#   wait on a call that is already counted.
PIPELINE_ORDER: tuple[MiddlewareType, ...] = (
    MiddlewareType.ERROR_HANDLING,
    MiddlewareType.URL_PREFIX,
    MiddlewareType.BEARER,
    MiddlewareType.CACHE,
    MiddlewareType.LOADING,
    MiddlewareType.LOGGING,
)


class RequestExecutor:
    """
    Thin orchestration layer between callers and the Transport layer.
    RequestExecutor is responsible for the following:
    • Owns the shared state of one pipeline: ResponseCache, LoadingTracker, EventBus.
    • Builds the middleware chain once, in PIPELINE_ORDER.
    • Runs every request through the chain with the transport as terminal handler.

    Two executors never share state unless the same cache/tracker/bus objects
    are passed to both, which keeps e.g. per-tenant pipelines isolated.
    """

    def __init__(
        self,
        transport: TransportEngine,
        base_url: BaseUrlSource,
        token_provider: TokenProvider | None = None,
        cache: ResponseCache | None = None,
        loading: LoadingTracker | None = None,
        event_bus: EventBus | None = None,
        enable_cache: bool = True,
        log_requests: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self.transport = transport
        self.token_provider = token_provider
        self.cache = cache if cache is not None else ResponseCache()
        self.loading = loading if loading is not None else LoadingTracker()
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self._base_url = base_url
        self._enable_cache = enable_cache
        self._log_requests = log_requests
        self._logger = logger

        self._stages: list[MiddlewareType] = []
        self._pipeline = self._build_pipeline()

    @property
    def stages(self) -> tuple[MiddlewareType, ...]:
        return tuple(self._stages)

    @property
    def pipeline(self) -> MiddlewarePipeline:
        return self._pipeline

    def _stage_arguments(self) -> dict[MiddlewareType, dict[str, Any] | None]:
        """Constructor kwargs per stage; None leaves the stage out of the chain."""
        return {
            MiddlewareType.ERROR_HANDLING: {"event_bus": self.event_bus, "logger": self._logger},
            MiddlewareType.URL_PREFIX: {"base_url": self._base_url},
            MiddlewareType.BEARER: (
                {"token_provider": self.token_provider} if self.token_provider is not None else None
            ),
            MiddlewareType.CACHE: {"cache": self.cache} if self._enable_cache else None,
            MiddlewareType.LOADING: {"tracker": self.loading},
            MiddlewareType.LOGGING: {"logger": self._logger} if self._log_requests else None,
        }

    def _build_pipeline(self) -> MiddlewarePipeline:
        pipeline = MiddlewarePipeline()
        arguments = self._stage_arguments()

        for stage in PIPELINE_ORDER:
            kwargs = arguments[stage]
            if kwargs is None:
                continue
            pipeline.add(MiddlewareFactory.create(stage, **kwargs))
            self._stages.append(stage)

        return pipeline

    async def send(self, request: RequestContext) -> HttpResponse:
        """
        Execute a single HTTP request through the middleware pipeline and the
        underlying Transport layer. Failures are re-raised to the caller after
        the error handling stage has logged and published them.
        """
        return await self._pipeline.execute(request, self.transport.send)

    def invalidate(self, url: str, method: RequestType = RequestType.GET) -> int:
        """
        Drop cached responses for `url` and all its query-string variants.
        Relative paths are resolved against the base URL first, the same way
        requests are, so `invalidate("/users")` matches `get("/users")`.
        """
        if not is_absolute_url(url):
            base_url = self._base_url() if callable(self._base_url) else self._base_url
            url = join_url(base_url, url)
        return self.cache.invalidate(url, method)
