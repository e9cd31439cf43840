from hub_http.request_execution.middleware.pipeline import (
    MIDDLEWARE_FUNC,
    NEXT_CALL,
    Middleware,
    MiddlewareFactory,
    MiddlewarePipeline,
    MiddlewareType,
)
from hub_http.request_execution.middleware.common import (
    BearerTokenMiddleware,
    UrlPrefixMiddleware,
    inject_bearer_token,
    normalize_url,
)
from hub_http.request_execution.middleware.interceptors import (
    CacheEntry,
    CacheMiddleware,
    ResponseCache,
)
from hub_http.request_execution.middleware.listeners import (
    ErrorHandlingMiddleware,
    LoadingMiddleware,
    LoggingMiddleware,
)

__all__ = [
    "MIDDLEWARE_FUNC",
    "NEXT_CALL",
    "Middleware",
    "MiddlewareFactory",
    "MiddlewarePipeline",
    "MiddlewareType",
    "BearerTokenMiddleware",
    "UrlPrefixMiddleware",
    "inject_bearer_token",
    "normalize_url",
    "CacheEntry",
    "CacheMiddleware",
    "ResponseCache",
    "ErrorHandlingMiddleware",
    "LoadingMiddleware",
    "LoggingMiddleware",
]
