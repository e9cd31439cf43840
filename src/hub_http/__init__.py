from hub_http.core import (
    EventBusError,
    HttpError,
    PipelineConfigError,
    configure_logging,
)
from hub_http.events import EventBus, EventMetaData, EventTopic, Subscription
from hub_http.auth import StaticTokenProvider, Token, TokenProvider, TokenStore
from hub_http.request_execution import (
    PIPELINE_ORDER,
    ApiClient,
    ErrorEvent,
    ErrorKind,
    HttpResponse,
    LoadingTracker,
    RequestContext,
    RequestExecutor,
    RequestType,
    ResponseCache,
    TransportEngine,
    inject_bearer_token,
    normalize_url,
)
from hub_http.config import ConfigLoader, EnvVarPreprocessor, ExecutorRuntimeFactory, HttpPipelineConfig
from hub_http.request_execution.transport.engine import AiohttpEngine

__version__ = "0.1.0"

__all__ = [
    "EventBusError",
    "HttpError",
    "PipelineConfigError",
    "configure_logging",
    "EventBus",
    "EventMetaData",
    "EventTopic",
    "Subscription",
    "StaticTokenProvider",
    "Token",
    "TokenProvider",
    "TokenStore",
    "PIPELINE_ORDER",
    "ApiClient",
    "ErrorEvent",
    "ErrorKind",
    "HttpResponse",
    "LoadingTracker",
    "RequestContext",
    "RequestExecutor",
    "RequestType",
    "ResponseCache",
    "TransportEngine",
    "inject_bearer_token",
    "normalize_url",
    "ConfigLoader",
    "EnvVarPreprocessor",
    "ExecutorRuntimeFactory",
    "HttpPipelineConfig",
    "AiohttpEngine",
]
