from typing import Callable, Union

from hub_http.auth.token.token_store import TokenProvider
from hub_http.request_execution.models import HttpResponse, RequestContext
from hub_http.request_execution.middleware.pipeline import (
    NEXT_CALL,
    Middleware,
    MiddlewareFactory,
    MiddlewareType,
)


# Standard middleware - these middleware objects hand a new request downstream

BaseUrlSource = Union[str, Callable[[], str]]

ABSOLUTE_URL_PREFIXES = ("http://", "https://", "//")
AUTHORIZATION_HEADER = "Authorization"


def is_absolute_url(url: str) -> bool:
    return url.lower().startswith(ABSOLUTE_URL_PREFIXES)


def join_url(base_url: str, path: str) -> str:
    """
    Join with exactly one slash. Only a single trailing slash is removed from
    the base and a single leading slash from the path.
    """
    base = base_url[:-1] if base_url.endswith("/") else base_url
    tail = path[1:] if path.startswith("/") else path
    return f"{base}/{tail}"


def normalize_url(request: RequestContext, base_url: str) -> RequestContext:
    """
    Prefix a relative request URL with `base_url`. Absolute and
    protocol-relative URLs are returned untouched.

        https://api.example.com/ + /users -> https://api.example.com/users
        https://api.example.com  + users  -> https://api.example.com/users
        https://api.example.com  + ""     -> https://api.example.com/
    """
    if is_absolute_url(request.url):
        return request
    return request.with_url(join_url(base_url, request.url))


def inject_bearer_token(request: RequestContext, token_provider: TokenProvider) -> RequestContext:
    """
    Return a copy carrying `Authorization: Bearer <token>`. A request that
    already has an Authorization header, or a provider without a token,
    yields the original request.
    """
    if request.has_header(AUTHORIZATION_HEADER):
        return request

    token = token_provider.get_token()
    if not token:
        return request

    return request.with_headers({AUTHORIZATION_HEADER: f"Bearer {token}"})


@MiddlewareFactory.register(MiddlewareType.URL_PREFIX)
class UrlPrefixMiddleware(Middleware):
    """
    Rewrites relative request paths into absolute URLs against the API base URL.
    The base URL may be a callable so configuration changes are picked up on
    the next request.
    """

    def __init__(self, base_url: BaseUrlSource) -> None:
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url() if callable(self._base_url) else self._base_url

    async def __call__(self, request: RequestContext, next_call: NEXT_CALL) -> HttpResponse:
        return await next_call(normalize_url(request, self.base_url))


@MiddlewareFactory.register(MiddlewareType.BEARER)
class BearerTokenMiddleware(Middleware):
    """
    Inject a bearer token into the Authorization header using the current value
    of the token provider.
    """

    def __init__(self, token_provider: TokenProvider) -> None:
        self.token_provider = token_provider

    async def __call__(self, request: RequestContext, next_call: NEXT_CALL) -> HttpResponse:
        return await next_call(inject_bearer_token(request, self.token_provider))
