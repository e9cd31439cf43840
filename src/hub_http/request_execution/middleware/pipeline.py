from enum import Enum
from typing import Awaitable, Callable, Protocol

from hub_http.core.abstract_factory import TypeAbstractFactory
from hub_http.request_execution.models import HttpResponse, RequestContext


NEXT_CALL = Callable[[RequestContext], Awaitable[HttpResponse]]
MIDDLEWARE_FUNC = Callable[[RequestContext, NEXT_CALL], Awaitable[HttpResponse]]


class MiddlewareType(str, Enum):
    ERROR_HANDLING = "error_handling"
    URL_PREFIX = "url_prefix"
    BEARER = "bearer"
    CACHE = "cache"
    LOADING = "loading"
    LOGGING = "logging"


class Middleware(Protocol):
    """
    Middleware wraps the downstream call for a single request. Each middleware
    receives the RequestContext and the "next" function in the chain. It can
    hand a new context downstream, inspect the response on the way back, or
    short-circuit by returning a response without calling next.
    """

    async def __call__(
        self,
        request: RequestContext,
        next_call: NEXT_CALL,
    ) -> HttpResponse:
        """
        Args:
            request: Current request context.
            next_call: Function to call next middleware in the chain.

        Returns:
            The HttpResponse produced downstream (or by this middleware).
        """
        ...


class MiddlewareFactory(TypeAbstractFactory[MiddlewareType, Middleware]):
    """Registry for Middleware components"""
    ...


class MiddlewarePipeline:
    """
    Onion-model runner: middleware added first is outermost, so it sees the
    request first on the way out and the response (or exception) last on the
    way back. The terminal handler is the transport call.
    """

    def __init__(self) -> None:
        self._middleware_list: list[MIDDLEWARE_FUNC] = []

    def add(self, middleware: MIDDLEWARE_FUNC) -> None:
        self._middleware_list.append(middleware)

    def __len__(self) -> int:
        return len(self._middleware_list)

    @property
    def middleware(self) -> tuple[MIDDLEWARE_FUNC, ...]:
        return tuple(self._middleware_list)

    async def execute(
        self,
        initial: RequestContext,
        terminal_handler: NEXT_CALL,
    ) -> HttpResponse:
        """
        Nests the middleware by index in the order defined in _middleware_list.
        """

        async def _run(index: int, req: RequestContext) -> HttpResponse:
            if index < len(self._middleware_list):
                mw = self._middleware_list[index]

                async def next_step(r: RequestContext) -> HttpResponse:
                    return await _run(index + 1, r)

                return await mw(req, next_step)
            else:
                return await terminal_handler(req)

        return await _run(0, initial)
