from typing import Any, Mapping

from hub_http.request_execution.executor import RequestExecutor
from hub_http.request_execution.models import (
    HeadersInput,
    HttpResponse,
    ParamsInput,
    RequestContext,
    RequestType,
)


class ApiClient:
    """
    Convenience facade over a RequestExecutor with one method per HTTP verb.

    Usage:
        client = ApiClient(executor)
        users = await client.get("/users", params={"page": 1})
        fresh = await client.get("/users", params={"page": 1}, refresh=True)
    """

    def __init__(self, executor: RequestExecutor) -> None:
        self.executor = executor

    async def request(
        self,
        method: RequestType | str,
        url: str,
        *,
        body: Any | None = None,
        params: ParamsInput = None,
        headers: HeadersInput = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        context = RequestContext(
            method=method,
            url=url,
            headers=headers,
            params=params,
            body=body,
            metadata=dict(metadata or {}),
        )
        return await self.executor.send(context)

    async def get(
        self,
        url: str,
        params: ParamsInput = None,
        headers: HeadersInput = None,
        refresh: bool = False,
    ) -> HttpResponse:
        """GET `url`. refresh=True bypasses (and replaces) any cached response."""
        if refresh:
            headers = dict(headers or {})
            headers[self.executor.cache.bust_header] = "true"
        return await self.request(RequestType.GET, url, params=params, headers=headers)

    async def post(
        self, url: str, body: Any | None = None, params: ParamsInput = None, headers: HeadersInput = None
    ) -> HttpResponse:
        return await self.request(RequestType.POST, url, body=body, params=params, headers=headers)

    async def put(
        self, url: str, body: Any | None = None, params: ParamsInput = None, headers: HeadersInput = None
    ) -> HttpResponse:
        return await self.request(RequestType.PUT, url, body=body, params=params, headers=headers)

    async def patch(
        self, url: str, body: Any | None = None, params: ParamsInput = None, headers: HeadersInput = None
    ) -> HttpResponse:
        return await self.request(RequestType.PATCH, url, body=body, params=params, headers=headers)

    async def delete(self, url: str, params: ParamsInput = None, headers: HeadersInput = None) -> HttpResponse:
        return await self.request(RequestType.DELETE, url, params=params, headers=headers)

    def invalidate(self, url: str) -> int:
        """Forget cached GET responses for `url`; returns how many were dropped."""
        return self.executor.invalidate(url)
