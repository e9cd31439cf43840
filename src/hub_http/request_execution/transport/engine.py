from __future__ import annotations
import ssl
from types import TracebackType
from typing import Any
from typing_extensions import Self
from aiohttp import ClientSession, ClientTimeout, TCPConnector

from hub_http.config.models.transport import TcpConnectionConfig, TlsConfig
from hub_http.core.abstract_factory import TypeAbstractFactory
from hub_http.core.exceptions import HttpError
from hub_http.request_execution.models import HttpResponse, RequestContext
from hub_http.request_execution.transport.base import TransportEngineType, TransportEngine


class TransportEngineFactory(TypeAbstractFactory[TransportEngineType, TransportEngine]):
    pass


@TransportEngineFactory.register(TransportEngineType.AIOHTTP)
class AiohttpEngine(TransportEngine):
    """
    TransportEngine adapter that uses aiohttp.ClientSession to make HTTP requests.
    Responses with a status of 400 or above are raised as HttpError.
    """

    def __init__(
        self,
        connector_config: TcpConnectionConfig | None = None,
        base_timeout: float = 30,
    ) -> None:
        self._connector_config = connector_config or TcpConnectionConfig()
        self._timeout = ClientTimeout(total=base_timeout)

        self._connector: TCPConnector | None = None
        self._session: ClientSession | None = None

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise ValueError(f"{self.__class__.__name__} aiohttp ClientSession not assigned")
        return self._session

    @session.setter
    def session(self, session: ClientSession | None) -> None:
        self._session = session

    def _build_ssl_context(self, cfg: TlsConfig) -> ssl.SSLContext:
        context = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)

        if not cfg.verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        if cfg.ca_bundle:
            context.load_verify_locations(cafile=str(cfg.ca_bundle))

        if cfg.client_cert:
            context.load_cert_chain(
                certfile=str(cfg.client_cert),
                keyfile=str(cfg.client_key) if cfg.client_key else None,
            )

        return context

    def _build_tcp_connector(self, cfg: TcpConnectionConfig) -> TCPConnector:
        kwargs = cfg.model_dump(exclude={"tls"})

        if cfg.tls and cfg.tls.enabled:
            kwargs["ssl"] = self._build_ssl_context(cfg.tls)

        return TCPConnector(**kwargs)

    async def __aenter__(self) -> Self:
        self._connector = self._build_tcp_connector(self._connector_config)
        self.session = ClientSession(connector=self._connector, timeout=self._timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self.session = None
        self._connector = None

    @staticmethod
    def _body_kwargs(body: Any | None) -> dict[str, Any]:
        if body is None:
            return {}
        if isinstance(body, (dict, list)):
            return {"json": body}
        return {"data": body}

    async def send(self, request: RequestContext) -> HttpResponse:
        method = request.method.value

        async with self.session.request(
            method,
            request.url,
            headers=dict(request.headers),
            params=list(request.params.items()) or None,
            **self._body_kwargs(request.body),
        ) as response:
            body = await response.read()
            url = str(response.url)

            if response.status >= 400:
                raise HttpError(
                    response.status,
                    f"Http failure response for {url}: {response.status} {response.reason or ''}".rstrip(),
                    url=url,
                    method=method,
                    body=body,
                    headers=response.headers,
                )

            return HttpResponse(
                status=response.status,
                headers=response.headers,
                body=body,
                url=url,
                method=request.method,
            )
