import logging
from datetime import datetime
from typing import Protocol, runtime_checkable

from hub_http.auth.token.models import Token


@runtime_checkable
class TokenProvider(Protocol):
    """
    Read-only view of the current access token. Implementations are owned by
    the authentication subsystem; the pipeline only calls get_token() once per
    request and never refreshes or persists tokens.
    """

    def get_token(self) -> str | None: ...


class StaticTokenProvider(TokenProvider):
    """Always hands out the same token (or none)."""

    def __init__(self, token: str | None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token


class TokenStore(TokenProvider):
    """
    In-process holder for the signed-in user's token. The authentication layer
    calls set_token()/clear() on login, refresh and logout; the pipeline reads
    it through get_token(). An expired token reads as None.
    """

    def __init__(self) -> None:
        self._token: Token | None = None
        self._logger = logging.getLogger(f"[{self.__class__.__name__}]")

    @property
    def token(self) -> Token | None:
        return self._token

    def set_token(self, token_value: str, expires_at: datetime | None = None) -> Token:
        self._token = Token(token_value=token_value, expires_at=expires_at)
        return self._token

    def clear(self) -> None:
        self._token = None

    def get_token(self) -> str | None:
        if self._token is None:
            return None

        if self._token.is_expired:
            self._logger.debug("Stored token has expired; requests will be sent without it")
            return None

        return self._token.token_value
