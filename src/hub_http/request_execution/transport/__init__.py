from hub_http.request_execution.transport.base import TransportEngine, TransportEngineType

__all__ = [
    "TransportEngine",
    "TransportEngineType",
]
