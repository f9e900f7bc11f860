import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

_UNSET = object()


class Debouncer:
    """Trailing-edge debounce on an event loop, dropping repeated values.

    Each ``submit`` replaces the pending value and restarts the quiet period.
    When the period elapses the callback gets the latest value, unless it
    equals the value delivered last time.
    """

    def __init__(self, loop, delay: float, callback: Callable[[Any], None]) -> None:
        self._loop = loop
        self.delay = delay
        self._callback = callback
        self._handle = None
        self._pending: Any = _UNSET
        self._last_delivered: Any = _UNSET

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def submit(self, value: Any) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._pending = value
        self._handle = self._loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = _UNSET

    def _fire(self) -> None:
        self._handle = None
        value, self._pending = self._pending, _UNSET
        if value is _UNSET or value == self._last_delivered:
            return
        self._last_delivered = value
        self._callback(value)

    def flush(self) -> Optional[Any]:
        """Deliver the pending value right away, if there is one."""
        if self._handle is None:
            return None
        self._handle.cancel()
        value = self._pending
        self._fire()
        return value
