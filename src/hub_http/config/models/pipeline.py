from pydantic import BaseModel, Field, field_validator

from hub_http.config.models.middleware import CacheMiddlewareModel
from hub_http.config.models.transport import AiohttpEngineConfig


class HttpPipelineConfig(BaseModel):
    """
    Complete pipeline configuration that can be loaded from JSON or YAML.
    """
    base_url: str
    cache: CacheMiddlewareModel = Field(default_factory=CacheMiddlewareModel)
    transport: AiohttpEngineConfig = Field(default_factory=AiohttpEngineConfig)
    log_requests: bool = False

    @field_validator("base_url")
    @classmethod
    def _require_absolute_base(cls, value: str) -> str:
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an absolute http(s) URL, got {value!r}")
        return value
