import logging
from contextlib import contextmanager
from typing import Callable, Iterator

from hub_http.events.bus import Subscription


BusyListener = Callable[[bool], None]


class LoadingTracker:
    """
    Counts requests currently inside the pipeline. `is_busy` is True while
    the count is above zero. Listeners are told about busy/idle transitions
    only, not about every increment.
    """

    def __init__(self) -> None:
        self._count = 0
        self._listeners: list[BusyListener] = []
        self._logger = logging.getLogger(f"[{self.__class__.__name__}]")

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_busy(self) -> bool:
        return self._count > 0

    def start(self) -> None:
        self._count += 1
        if self._count == 1:
            self._notify(True)

    def stop(self) -> None:
        if self._count == 0:
            self._logger.warning("stop() called with no request in flight; ignoring")
            return

        self._count -= 1
        if self._count == 0:
            self._notify(False)

    @contextmanager
    def track(self) -> Iterator[None]:
        self.start()
        try:
            yield
        finally:
            self.stop()

    def subscribe(self, listener: BusyListener) -> Subscription:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_unsubscribe)

    def _notify(self, busy: bool) -> None:
        for listener in list(self._listeners):
            try:
                listener(busy)
            except Exception:
                self._logger.exception(f"Loading listener {listener!r} failed")
