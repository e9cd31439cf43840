from hub_http.auth.token.models import Token
from hub_http.auth.token.token_store import StaticTokenProvider, TokenProvider, TokenStore

__all__ = ["Token", "TokenProvider", "StaticTokenProvider", "TokenStore"]
