import pytest

from hub_http.events.bus import EventBus
from hub_http.request_execution.loading import LoadingTracker
from .fixtures.configs.pipeline import minimal_pipeline_config


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def loading_tracker() -> LoadingTracker:
    return LoadingTracker()


@pytest.fixture
def published(event_bus):
    """Collects (topic, payload) tuples for both http error topics."""
    events = []
    event_bus.subscribe("http.error", lambda e: events.append((e.key, e.data)))
    event_bus.subscribe("http.unknown.error", lambda e: events.append((e.key, e.data)))
    return events


__all__ = [
    'minimal_pipeline_config',
]
