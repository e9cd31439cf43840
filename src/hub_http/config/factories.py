from abc import ABC, abstractmethod
from typing import Any, Callable

from hub_http.auth.token.token_store import TokenProvider
from hub_http.config.models.pipeline import HttpPipelineConfig
from hub_http.config.models.transport import TransportEngineModel
from hub_http.events.bus import EventBus
from hub_http.request_execution.executor import RequestExecutor
from hub_http.request_execution.loading import LoadingTracker
from hub_http.request_execution.middleware.interceptors import ResponseCache
from hub_http.request_execution.transport.base import TransportEngine
from hub_http.request_execution.transport.engine import TransportEngineFactory


class RuntimeFactory(ABC):

    @staticmethod
    @abstractmethod
    def build_factory(cfg: Any, *args, **kwargs) -> Callable[..., Any]: ...


class TransportRuntimeFactory(RuntimeFactory):

    @staticmethod
    def build_factory(cfg: TransportEngineModel) -> Callable[[], TransportEngine]:

        def factory() -> TransportEngine:
            return TransportEngineFactory.create(cfg.type, **cfg.to_runtime_args())

        return factory


class ExecutorRuntimeFactory(RuntimeFactory):
    """
    Builds RequestExecutors from an HttpPipelineConfig. Each executor gets its
    own ResponseCache; the event bus and loading tracker can be shared by
    passing them in.
    """

    @staticmethod
    def build_executor(
        cfg: HttpPipelineConfig,
        transport: TransportEngine,
        token_provider: TokenProvider | None = None,
        event_bus: EventBus | None = None,
        loading: LoadingTracker | None = None,
    ) -> RequestExecutor:
        return RequestExecutor(
            transport=transport,
            base_url=cfg.base_url,
            token_provider=token_provider,
            cache=ResponseCache(**cfg.cache.to_runtime_args()),
            loading=loading,
            event_bus=event_bus,
            enable_cache=cfg.cache.enabled,
            log_requests=cfg.log_requests,
        )

    @staticmethod
    def build_factory(
        cfg: HttpPipelineConfig,
        token_provider: TokenProvider | None = None,
        event_bus: EventBus | None = None,
        loading: LoadingTracker | None = None,
    ) -> Callable[[TransportEngine], RequestExecutor]:

        def factory(transport: TransportEngine) -> RequestExecutor:
            return ExecutorRuntimeFactory.build_executor(
                cfg, transport, token_provider=token_provider, event_bus=event_bus, loading=loading
            )

        return factory
