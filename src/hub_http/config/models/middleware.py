from pydantic import BaseModel, Field, PositiveFloat, field_validator
from typing import Any

from hub_http.request_execution.middleware.interceptors import (
    DEFAULT_BUST_HEADER,
    DEFAULT_TTL_SECONDS,
)


class MiddlewareConfigModel(BaseModel):
    model_config = {"frozen": True}

    def to_runtime_args(self) -> dict[str, Any]:
        return {}


class CacheMiddlewareModel(MiddlewareConfigModel):
    """GET response cache configuration"""
    enabled: bool = True
    ttl_seconds: PositiveFloat = DEFAULT_TTL_SECONDS
    bust_header: str = Field(default=DEFAULT_BUST_HEADER, min_length=1)

    @field_validator("bust_header")
    @classmethod
    def _strip_header(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("bust_header must not be blank")
        return value

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "ttl_seconds": self.ttl_seconds,
            "bust_header": self.bust_header,
        }
