from hub_http.events.bus import (
    EventBus,
    EventHandler,
    EventMetaData,
    EventTopic,
    Subscription,
)

__all__ = [
    "EventBus",
    "EventHandler",
    "EventMetaData",
    "EventTopic",
    "Subscription",
]
