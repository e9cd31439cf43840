from hub_http.auth.token import StaticTokenProvider, Token, TokenProvider, TokenStore

__all__ = ["Token", "TokenProvider", "StaticTokenProvider", "TokenStore"]
