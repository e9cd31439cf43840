from __future__ import annotations
from typing import Any, Mapping


class HttpError(Exception):
    """
    Raised by a TransportEngine when the server answered with a failure status.
    Carries everything the error classifier needs to publish an `http.error` event.
    """

    def __init__(
        self,
        status: int,
        message: str,
        *,
        url: str | None = None,
        method: str | None = None,
        body: Any | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.status = status
        self.message = message
        self.url = url
        self.method = method
        self.body = body
        self.headers = dict(headers or {})
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status={self.status}, method={self.method}, url={self.url!r})"


class PipelineConfigError(Exception):
    """Raised when a pipeline configuration cannot be read or fails validation."""

    pass


class EventBusError(ValueError):
    """Raised on invalid event bus usage, e.g. publishing to an empty topic."""

    pass
