from __future__ import annotations
import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Mapping, Union
from urllib.parse import urlencode

from multidict import CIMultiDict, CIMultiDictProxy, MultiDict, MultiDictProxy


HeadersInput = Union[Mapping[str, str], Iterable[tuple[str, str]], None]
ParamsInput = Union[Mapping[str, Any], Iterable[tuple[str, Any]], None]


class RequestType(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


def _pairs(source: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> Iterable[tuple[str, Any]]:
    if source is None:
        return ()
    if isinstance(source, Mapping):
        return source.items()
    return source


def freeze_headers(headers: HeadersInput) -> CIMultiDictProxy[str]:
    """Case-insensitive, read-only headers holding one value per name (last one wins)."""
    if isinstance(headers, CIMultiDictProxy):
        return headers

    frozen: CIMultiDict[str] = CIMultiDict()
    for name, value in _pairs(headers):
        frozen[name] = str(value)
    return CIMultiDictProxy(frozen)


def freeze_params(params: ParamsInput) -> MultiDictProxy[str]:
    """Read-only query parameters; list/tuple values become repeated keys."""
    if isinstance(params, MultiDictProxy):
        return params

    frozen: MultiDict[str] = MultiDict()
    for key, value in _pairs(params):
        if isinstance(value, (list, tuple)):
            for item in value:
                frozen.add(key, str(item))
        elif value is not None:
            frozen.add(key, str(value))
    return MultiDictProxy(frozen)


@dataclass(frozen=True)
class RequestContext:
    """
    Immutable description of a single HTTP request.
    • method: HTTP request type - GET, POST, etc
    • url: relative path or absolute URL
    • headers: case-insensitive request headers
    • params: query parameters, keys may repeat
    • body: opaque payload handed to the transport
    • metadata: caller bookkeeping, never sent over the wire

    Middleware never edits a context in place; the with_*/without_* helpers
    return a new instance and leave the original untouched.
    """
    method: RequestType
    url: str
    headers: CIMultiDictProxy[str] = field(default_factory=CIMultiDict)
    params: MultiDictProxy[str] = field(default_factory=MultiDict)
    body: Any | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.method, RequestType):
            object.__setattr__(self, "method", RequestType(str(self.method).upper()))
        object.__setattr__(self, "headers", freeze_headers(self.headers))
        object.__setattr__(self, "params", freeze_params(self.params))

    @property
    def url_with_params(self) -> str:
        if not self.params:
            return self.url
        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{urlencode(list(self.params.items()))}"

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def with_url(self, url: str) -> "RequestContext":
        return replace(self, url=url)

    def with_headers(self, new_headers: Mapping[str, str]) -> "RequestContext":
        """Return a copy with `new_headers` set, replacing any existing values."""
        merged = CIMultiDict(self.headers)
        for name, value in new_headers.items():
            merged[name] = str(value)
        return replace(self, headers=CIMultiDictProxy(merged))

    def without_headers(self, *names: str) -> "RequestContext":
        if not any(name in self.headers for name in names):
            return self

        remaining = CIMultiDict(self.headers)
        for name in names:
            remaining.popall(name, None)
        return replace(self, headers=CIMultiDictProxy(remaining))


@dataclass(frozen=True)
class HttpResponse:
    """
    Successful transport result. Cached GET responses are shared between
    callers, so the object is frozen.
    """
    status: int
    headers: CIMultiDictProxy[str] = field(default_factory=CIMultiDict)
    body: bytes | None = None
    url: str = ""
    method: RequestType = RequestType.GET

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", freeze_headers(self.headers))

    @property
    def ok(self) -> bool:
        return self.status < 400

    def text(self, encoding: str = "utf-8") -> str:
        if self.body is None:
            return ""
        return self.body.decode(encoding)

    def json(self) -> Any:
        if not self.body:
            return None
        return json.loads(self.text())


class ErrorKind(str, Enum):
    HTTP_ERROR = "HttpError"
    UNKNOWN_ERROR = "UnknownError"


@dataclass(frozen=True)
class ErrorEvent:
    """Structured description of a failed request, published on the event bus."""
    kind: ErrorKind
    message: str
    method: str
    request_url: str
    url: str | None = None
    status: int | None = None
    error: Any | None = None
    error_type: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status": self.status,
            "message": self.message,
            "error": self.error,
            "error_type": self.error_type,
            "url": self.url,
            "method": self.method,
            "request_url": self.request_url,
        }
