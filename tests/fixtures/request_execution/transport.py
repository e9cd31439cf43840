import asyncio
from types import TracebackType
from typing import Callable

from hub_http.config.models.transport import TcpConnectionConfig, TlsConfig
from hub_http.request_execution.models import HttpResponse, RequestContext
from hub_http.request_execution.transport.base import TransportEngine


class FakeTransportEngine(TransportEngine):
    """
    In-memory transport. Records every request it receives. When `gate` is set
    each send() waits on it, which keeps requests in flight until the test
    releases them. `error` (an exception or a factory) is raised instead of
    answering.
    """

    def __init__(
        self,
        status: int = 200,
        body: bytes = b'{"ok": true}',
        error: Exception | Callable[[RequestContext], Exception] | None = None,
        gate: asyncio.Event | None = None,
    ):
        self.status = status
        self.body = body
        self.error = error
        self.gate = gate
        self.requests: list[RequestContext] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> RequestContext | None:
        return self.requests[-1] if self.requests else None

    async def __aenter__(self):
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        pass

    async def send(self, request: RequestContext) -> HttpResponse:
        self.requests.append(request)

        if self.gate is not None:
            await self.gate.wait()

        if self.error is not None:
            raise self.error(request) if callable(self.error) else self.error

        return HttpResponse(
            status=self.status,
            headers={"Content-Type": "application/json"},
            body=self.body,
            url=request.url_with_params,
            method=request.method,
        )


def tcp_config_no_tls() -> TcpConnectionConfig:
    return TcpConnectionConfig(
        limit=10,
        limit_per_host=2,
        ttl_dns_cache=60,
        force_close=False,
        enable_cleanup_closed=True,
        tls=None,
    )


def tls_config_disabled() -> TlsConfig:
    return TlsConfig(
        enabled=False,
        verify=True,
    )


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
