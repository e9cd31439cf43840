from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from types import TracebackType

from hub_http.request_execution.models import HttpResponse, RequestContext


class TransportEngineType(str, Enum):
    AIOHTTP = "aiohttp"


class TransportEngine(ABC):
    """
    A structural interface for the component that performs the actual network
    call. send() receives a fully prepared RequestContext (absolute URL,
    auth headers) and returns an HttpResponse, or raises HttpError when the
    server answers with a failure status. Any other exception (connection
    failure, timeout) propagates as-is. Transport is also the lifecycle
    manager for an HTTP session.
    """

    @abstractmethod
    async def __aenter__(self) -> "TransportEngine":
        ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        ...

    @abstractmethod
    async def send(self, request: RequestContext) -> HttpResponse:
        ...
