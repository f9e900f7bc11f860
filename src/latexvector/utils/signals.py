import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


class Signal:
    """Synchronous observer list: ``emit`` calls every connected slot in order.

    A slot that raises is logged and skipped so the remaining slots still run.
    """

    def __init__(self, name: str = "signal"):
        self.name = name
        self._slots: List[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> Callable[..., Any]:
        if slot not in self._slots:
            self._slots.append(slot)
        return slot

    def disconnect(self, slot: Callable[..., Any]) -> None:
        try:
            self._slots.remove(slot)
        except ValueError:
            pass

    def emit(self, *args: Any) -> None:
        for slot in list(self._slots):
            try:
                slot(*args)
            except Exception:
                logger.exception("Error in %s listener", self.name)

    def __len__(self) -> int:
        return len(self._slots)
