from hub_http.config.models.middleware import CacheMiddlewareModel, MiddlewareConfigModel
from hub_http.config.models.pipeline import HttpPipelineConfig
from hub_http.config.models.transport import (
    AiohttpEngineConfig,
    TcpConnectionConfig,
    TlsConfig,
    TransportEngineModel,
)

__all__ = [
    "CacheMiddlewareModel",
    "MiddlewareConfigModel",
    "HttpPipelineConfig",
    "AiohttpEngineConfig",
    "TcpConnectionConfig",
    "TlsConfig",
    "TransportEngineModel",
]
