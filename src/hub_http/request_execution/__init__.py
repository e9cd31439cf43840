from hub_http.request_execution.executor import PIPELINE_ORDER, RequestExecutor
from hub_http.request_execution.client import ApiClient
from hub_http.request_execution.loading import LoadingTracker
from hub_http.request_execution.models import (
    ErrorEvent,
    ErrorKind,
    HttpResponse,
    RequestContext,
    RequestType,
)
from hub_http.request_execution.middleware import (
    MIDDLEWARE_FUNC,
    NEXT_CALL,
    BearerTokenMiddleware,
    CacheEntry,
    CacheMiddleware,
    ErrorHandlingMiddleware,
    LoadingMiddleware,
    LoggingMiddleware,
    Middleware,
    MiddlewareFactory,
    MiddlewarePipeline,
    MiddlewareType,
    ResponseCache,
    UrlPrefixMiddleware,
    inject_bearer_token,
    normalize_url,
)
from hub_http.request_execution.transport import TransportEngine, TransportEngineType

__all__ = [
    "PIPELINE_ORDER",
    "RequestExecutor",
    "ApiClient",
    "LoadingTracker",
    "ErrorEvent",
    "ErrorKind",
    "HttpResponse",
    "RequestContext",
    "RequestType",
    "MIDDLEWARE_FUNC",
    "NEXT_CALL",
    "BearerTokenMiddleware",
    "CacheEntry",
    "CacheMiddleware",
    "ErrorHandlingMiddleware",
    "LoadingMiddleware",
    "LoggingMiddleware",
    "Middleware",
    "MiddlewareFactory",
    "MiddlewarePipeline",
    "MiddlewareType",
    "ResponseCache",
    "UrlPrefixMiddleware",
    "inject_bearer_token",
    "normalize_url",
    "TransportEngine",
    "TransportEngineType",
]
