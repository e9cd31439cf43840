"""Unit tests for the RequestExecutor composition contract"""
import asyncio

import pytest

from hub_http.auth import StaticTokenProvider, TokenStore
from hub_http.core.exceptions import HttpError
from hub_http.request_execution import (
    PIPELINE_ORDER,
    MiddlewareType,
    RequestContext,
    RequestExecutor,
    RequestType,
)
from tests.fixtures.request_execution import FakeTransportEngine


BASE = "https://api.example.com/"


def users(method: RequestType = RequestType.GET, **kwargs) -> RequestContext:
    return RequestContext(method=method, url=kwargs.pop("url", "/users"), **kwargs)


def not_found(req: RequestContext) -> HttpError:
    return HttpError(
        404,
        f"Http failure response for {req.url}: 404 Not Found",
        url=req.url_with_params,
        method=req.method.value,
        body=b"missing",
    )


@pytest.mark.unit
class TestPipelineComposition:

    def test_pipeline_order_contract(self):
        assert PIPELINE_ORDER == (
            MiddlewareType.ERROR_HANDLING,
            MiddlewareType.URL_PREFIX,
            MiddlewareType.BEARER,
            MiddlewareType.CACHE,
            MiddlewareType.LOADING,
            MiddlewareType.LOGGING,
        )

    def test_default_stages(self):
        executor = RequestExecutor(FakeTransportEngine(), BASE, token_provider=StaticTokenProvider("t"))

        assert executor.stages == (
            MiddlewareType.ERROR_HANDLING,
            MiddlewareType.URL_PREFIX,
            MiddlewareType.BEARER,
            MiddlewareType.CACHE,
            MiddlewareType.LOADING,
        )
        assert len(executor.pipeline) == 5

    def test_optional_stages(self):
        executor = RequestExecutor(FakeTransportEngine(), BASE, enable_cache=False, log_requests=True)

        assert executor.stages == (
            MiddlewareType.ERROR_HANDLING,
            MiddlewareType.URL_PREFIX,
            MiddlewareType.LOADING,
            MiddlewareType.LOGGING,
        )

    def test_independent_executors_do_not_share_state(self):
        a = RequestExecutor(FakeTransportEngine(), BASE)
        b = RequestExecutor(FakeTransportEngine(), BASE)

        assert a.cache is not b.cache
        assert a.loading is not b.loading
        assert a.event_bus is not b.event_bus


@pytest.mark.unit
@pytest.mark.asyncio
class TestRequestExecutorSend:

    async def test_transport_receives_normalized_authorized_request(self):
        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, BASE, token_provider=StaticTokenProvider("abc"))

        response = await executor.send(users(params={"page": 1}))

        sent = transport.last_request
        assert sent.url == "https://api.example.com/users"
        assert sent.headers["Authorization"] == "Bearer abc"
        assert response.url == "https://api.example.com/users?page=1"

    async def test_cache_bust_header_never_reaches_transport(self):
        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, BASE)

        await executor.send(users())
        await executor.send(users(headers={"X-Refresh": "true"}))

        assert transport.call_count == 2
        assert all("X-Refresh" not in r.headers for r in transport.requests)

    async def test_cache_key_uses_normalized_url(self):
        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, BASE)

        await executor.send(users(url="/users"))
        await executor.send(users(url="users"))
        await executor.send(users(url="https://api.example.com/users"))

        assert transport.call_count == 1
        assert "GET https://api.example.com/users" in executor.cache

    async def test_token_change_does_not_invalidate_cache(self):
        store = TokenStore()
        store.set_token("first")
        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, BASE, token_provider=store)

        await executor.send(users())
        store.set_token("second")
        await executor.send(users())

        assert transport.call_count == 1

    async def test_concurrent_gets_share_one_call_through_full_chain(self):
        gate = asyncio.Event()
        transport = FakeTransportEngine(gate=gate)
        executor = RequestExecutor(transport, BASE)

        tasks = [asyncio.ensure_future(executor.send(users())) for _ in range(4)]
        for _ in range(5):
            await asyncio.sleep(0)

        assert transport.call_count == 1
        assert executor.loading.count == 1

        gate.set()
        results = await asyncio.gather(*tasks)

        assert all(r is results[0] for r in results)
        assert executor.loading.count == 0

    async def test_cache_hit_leaves_loading_counter_untouched(self):
        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, BASE)
        transitions = []
        executor.loading.subscribe(transitions.append)

        await executor.send(users())
        await executor.send(users())

        assert transitions == [True, False]
        assert executor.loading.count == 0

    @pytest.mark.parametrize("method", [RequestType.POST, RequestType.PUT, RequestType.PATCH, RequestType.DELETE])
    async def test_writes_always_reach_transport(self, method):
        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, BASE)

        await executor.send(users(method=method, body={"name": "Ada"}))
        await executor.send(users(method=method, body={"name": "Ada"}))

        assert transport.call_count == 2
        assert len(executor.cache) == 0

    async def test_http_failure_is_published_once_and_reraised(self):
        """
        GIVEN a transport that answers 404
        WHEN a GET is sent through the executor
        THEN one http.error event carries status, URL and method, and the caller gets the same error
        """
        transport = FakeTransportEngine(error=not_found)
        executor = RequestExecutor(transport, BASE)
        events = []
        executor.event_bus.subscribe("http.error", events.append)

        with pytest.raises(HttpError) as exc_info:
            await executor.send(users())

        assert len(events) == 1
        payload = events[0].data
        assert payload["status"] == 404
        assert payload["url"] == "https://api.example.com/users"
        assert payload["request_url"] == "/users"
        assert payload["method"] == "GET"
        assert exc_info.value.status == 404
        assert executor.loading.count == 0
        assert len(executor.cache) == 0

    async def test_failure_in_early_stage_is_observed(self):
        def broken_base_url() -> str:
            raise LookupError("base url not configured")

        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, broken_base_url)
        events = []
        executor.event_bus.subscribe("http.unknown.error", events.append)

        with pytest.raises(LookupError):
            await executor.send(users())

        assert transport.call_count == 0
        assert events[0].data["error_type"] == "LookupError"

    async def test_shared_waiters_each_publish_their_failure(self):
        gate = asyncio.Event()
        transport = FakeTransportEngine(gate=gate, error=not_found)
        executor = RequestExecutor(transport, BASE)
        events = []
        executor.event_bus.subscribe("http.error", events.append)

        tasks = [asyncio.ensure_future(executor.send(users())) for _ in range(2)]
        for _ in range(5):
            await asyncio.sleep(0)
        gate.set()

        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert transport.call_count == 1
        assert all(isinstance(r, HttpError) for r in results)
        assert len(events) == 2


@pytest.mark.unit
@pytest.mark.asyncio
class TestRequestExecutorInvalidate:

    @pytest.mark.parametrize("path", ["/users", "users", "https://api.example.com/users"])
    async def test_invalidate_resolves_relative_paths(self, path):
        """
        GIVEN cached GETs made with a relative path
        WHEN the path is invalidated the way callers wrote it
        THEN every query variant is dropped and the next GET reaches the transport
        """
        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, BASE)

        await executor.send(users(params={"page": 1}))
        await executor.send(users())

        assert executor.invalidate(path) == 2
        assert len(executor.cache) == 0

        await executor.send(users(params={"page": 1}))
        assert transport.call_count == 3

    async def test_invalidate_uses_callable_base_url(self):
        transport = FakeTransportEngine()
        executor = RequestExecutor(transport, lambda: "https://tenant.example.com/")

        await executor.send(users())

        assert executor.invalidate("/users") == 1

    async def test_invalidate_leaves_other_paths(self):
        executor = RequestExecutor(FakeTransportEngine(), BASE)

        await executor.send(users(url="/users"))
        await executor.send(users(url="/users-archive"))

        assert executor.invalidate("/users") == 1
        assert list(executor.cache) == ["GET https://api.example.com/users-archive"]
