import pytest
from pydantic import ValidationError

from hub_http.config.models import (
    AiohttpEngineConfig,
    CacheMiddlewareModel,
    HttpPipelineConfig,
    TcpConnectionConfig,
)
from hub_http.request_execution.transport.base import TransportEngineType
from tests.fixtures.configs.pipeline import minimal_pipeline_config


@pytest.mark.unit
@pytest.mark.config
def test_pipeline_config_defaults():
    cfg = HttpPipelineConfig(base_url="https://api.example.com")

    assert cfg.cache.enabled is True
    assert cfg.cache.ttl_seconds == 300
    assert cfg.cache.bust_header == "X-Refresh"
    assert cfg.transport.type is TransportEngineType.AIOHTTP
    assert cfg.log_requests is False


@pytest.mark.unit
@pytest.mark.config
@pytest.mark.parametrize("base_url", ["api.example.com", "/api", "ftp://files.example.com"])
def test_pipeline_config_requires_absolute_base_url(base_url):
    with pytest.raises(ValidationError, match="base_url"):
        HttpPipelineConfig(base_url=base_url)


@pytest.mark.unit
@pytest.mark.config
def test_cache_model_runtime_args(minimal_pipeline_config):
    assert minimal_pipeline_config.cache.to_runtime_args() == {
        "ttl_seconds": 60,
        "bust_header": "X-Refresh",
    }


@pytest.mark.unit
@pytest.mark.config
@pytest.mark.parametrize(
    "kwargs",
    [{"ttl_seconds": 0}, {"ttl_seconds": -1}, {"bust_header": ""}, {"bust_header": "   "}],
)
def test_cache_model_rejects_invalid_values(kwargs):
    with pytest.raises(ValidationError):
        CacheMiddlewareModel(**kwargs)


@pytest.mark.unit
@pytest.mark.config
def test_cache_model_strips_bust_header():
    assert CacheMiddlewareModel(bust_header=" X-No-Cache ").bust_header == "X-No-Cache"


@pytest.mark.unit
@pytest.mark.config
def test_cache_model_is_frozen():
    model = CacheMiddlewareModel()

    with pytest.raises(ValidationError):
        model.ttl_seconds = 10


@pytest.mark.unit
@pytest.mark.config
def test_transport_runtime_args(minimal_pipeline_config):
    args = minimal_pipeline_config.transport.to_runtime_args()

    assert args["base_timeout"] == 5
    assert isinstance(args["connector_config"], TcpConnectionConfig)
    assert args["connector_config"].limit == 10


@pytest.mark.unit
@pytest.mark.config
def test_transport_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        AiohttpEngineConfig(base_timeout=0)
