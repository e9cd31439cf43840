from hub_http.config.models import (
    AiohttpEngineConfig,
    CacheMiddlewareModel,
    HttpPipelineConfig,
    MiddlewareConfigModel,
    TcpConnectionConfig,
    TlsConfig,
    TransportEngineModel,
)
from hub_http.config.preprocessor import (
    ConfigPreprocessor,
    ConfigValue,
    EnvVarPreprocessor,
)
from hub_http.config.loader import ConfigLoader
from hub_http.config.factories import (
    ExecutorRuntimeFactory,
    RuntimeFactory,
    TransportRuntimeFactory,
)

__all__ = [
    "AiohttpEngineConfig",
    "CacheMiddlewareModel",
    "HttpPipelineConfig",
    "MiddlewareConfigModel",
    "TcpConnectionConfig",
    "TlsConfig",
    "TransportEngineModel",
    "ConfigPreprocessor",
    "ConfigValue",
    "EnvVarPreprocessor",
    "ConfigLoader",
    "ExecutorRuntimeFactory",
    "RuntimeFactory",
    "TransportRuntimeFactory",
]
