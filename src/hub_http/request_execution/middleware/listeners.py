# Middleware components that observe but do not change the request or response
import json
import logging
from typing import Any

from multidict import CIMultiDict

from hub_http.core.exceptions import HttpError
from hub_http.events.bus import EventBus, EventTopic
from hub_http.request_execution.loading import LoadingTracker
from hub_http.request_execution.models import ErrorEvent, ErrorKind, HttpResponse, RequestContext
from hub_http.request_execution.middleware.pipeline import (
    NEXT_CALL,
    Middleware,
    MiddlewareFactory,
    MiddlewareType,
)


@MiddlewareFactory.register(MiddlewareType.LOADING)
class LoadingMiddleware(Middleware):
    """
    Keeps the shared LoadingTracker busy for as long as the downstream call
    runs. The decrement happens in a finally block, so success, failure and
    cancellation all leave the counter balanced.
    """

    def __init__(self, tracker: LoadingTracker) -> None:
        self.tracker = tracker

    async def __call__(self, request: RequestContext, next_call: NEXT_CALL) -> HttpResponse:
        with self.tracker.track():
            return await next_call(request)


@MiddlewareFactory.register(MiddlewareType.ERROR_HANDLING)
class ErrorHandlingMiddleware(Middleware):
    """
    Observes every failure raised downstream, logs it, publishes it on the
    event bus and re-raises the original exception unchanged.

    HttpError (the server answered with a failure status) is published on
    `http.error`; any other exception on `http.unknown.error` with the raw
    exception and its type name. What a 401 or a 500 means to the application
    is up to the subscribers.
    """

    def __init__(self, event_bus: EventBus, logger: logging.Logger | None = None) -> None:
        self.event_bus = event_bus
        self._logger = logger or logging.getLogger(__name__)

    @staticmethod
    def decode_body(exc: HttpError) -> Any:
        """
        Error body as subscribers want it: parsed JSON for JSON responses,
        text for other byte bodies. Unparseable JSON falls back to text.
        """
        body = exc.body
        if not isinstance(body, (bytes, bytearray)):
            return body

        text = bytes(body).decode("utf-8", errors="replace")
        content_type = CIMultiDict(exc.headers).get("Content-Type", "")
        if "json" in content_type.lower() and text.strip():
            try:
                return json.loads(text)
            except ValueError:
                return text
        return text

    @staticmethod
    def classify(request: RequestContext, exc: Exception) -> ErrorEvent:
        if isinstance(exc, HttpError):
            return ErrorEvent(
                kind=ErrorKind.HTTP_ERROR,
                status=exc.status,
                message=exc.message,
                error=ErrorHandlingMiddleware.decode_body(exc),
                error_type=type(exc).__name__,
                url=exc.url,
                method=request.method.value,
                request_url=request.url,
            )

        return ErrorEvent(
            kind=ErrorKind.UNKNOWN_ERROR,
            message=str(exc) or type(exc).__name__,
            error=exc,
            error_type=type(exc).__name__,
            url=request.url,
            method=request.method.value,
            request_url=request.url,
        )

    def _report(self, event: ErrorEvent, exc: Exception) -> None:
        if event.kind is ErrorKind.HTTP_ERROR:
            record = {"status": event.status, "message": event.message, "error": event.error}
            self._logger.error(f"HTTP Error: {record}", extra={"error_event": event.to_payload()})
            self.event_bus.publish(EventTopic.HTTP_ERROR, event.to_payload())
        else:
            self._logger.error(
                f"Unknown HTTP Error: {event.error_type}: {event.message}",
                exc_info=exc,
                extra={"error_event": event.to_payload()},
            )
            self.event_bus.publish(EventTopic.HTTP_UNKNOWN_ERROR, event.to_payload())

    async def __call__(self, request: RequestContext, next_call: NEXT_CALL) -> HttpResponse:
        try:
            return await next_call(request)
        except Exception as exc:
            self._report(self.classify(request, exc), exc)
            raise


@MiddlewareFactory.register(MiddlewareType.LOGGING)
class LoggingMiddleware(Middleware):
    """Logs each request leaving for the transport and the status it came back with."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    async def __call__(self, request: RequestContext, next_call: NEXT_CALL) -> HttpResponse:
        self._logger.debug(f"-> {request.method.value} {request.url_with_params}")

        try:
            result = await next_call(request)
        except Exception as exc:
            self._logger.debug(f"<- FAILED {request.url_with_params}: {type(exc).__name__}: {exc}")
            raise

        self._logger.debug(f"<- {result.status} {request.url_with_params}")
        return result
