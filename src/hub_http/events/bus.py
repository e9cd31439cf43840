from __future__ import annotations
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from hub_http.core.exceptions import EventBusError


T = TypeVar("T")


class EventTopic(str, Enum):
    HTTP_ERROR = "http.error"
    HTTP_UNKNOWN_ERROR = "http.unknown.error"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class EventMetaData(Generic[T]):
    """
    Envelope delivered to subscribers. Every published event gets a unique id
    and the UTC time it was published.
    """
    key: str
    data: T | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=_utc_timestamp)


EventHandler = Callable[[EventMetaData[Any]], None]


class Subscription:
    """Handle returned by subscribe(); cancel() detaches the listener."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if self._active:
            self._active = False
            self._unsubscribe()


class EventBus:
    """
    Fire-and-forget publish/subscribe bus. Handlers run synchronously in
    subscription order; a failing handler is logged and never reaches the
    publisher or the remaining handlers.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _validate_key(key: str) -> str:
        key = str(key.value if isinstance(key, Enum) else key)
        if not key.strip():
            raise EventBusError("key must not be empty")
        return key

    def publish(self, key: str, data: Any | None = None) -> EventMetaData[Any]:
        key = self._validate_key(key)
        event = EventMetaData(key=key, data=data)

        # copy so handlers can unsubscribe while being notified
        for handler in list(self._handlers.get(key, ())):
            try:
                handler(event)
            except Exception:
                self._logger.exception(f"[EventBus] handler {handler!r} failed for '{key}'")

        return event

    def subscribe(self, key: str, handler: EventHandler) -> Subscription:
        key = self._validate_key(key)
        self._handlers.setdefault(key, []).append(handler)

        def _unsubscribe() -> None:
            handlers = self._handlers.get(key, [])
            if handler in handlers:
                handlers.remove(handler)
            if not handlers:
                self._handlers.pop(key, None)

        return Subscription(_unsubscribe)

    def subscriber_count(self, key: str) -> int:
        return len(self._handlers.get(self._validate_key(key), ()))
