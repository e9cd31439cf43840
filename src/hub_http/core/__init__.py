from hub_http.core.abstract_factory import TypeAbstractFactory
from hub_http.core.exceptions import EventBusError, HttpError, PipelineConfigError
from hub_http.core.logging import configure_logging, set_aiohttp_logging_level

__all__ = [
    "TypeAbstractFactory",
    "EventBusError",
    "HttpError",
    "PipelineConfigError",
    "configure_logging",
    "set_aiohttp_logging_level",
]
