import itertools
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

# Make src importable without an install
REPO_ROOT = Path(__file__).resolve().parent.parent
SRC = REPO_ROOT / "src"
sys.path.insert(0, str(SRC))

from latexvector.clipboard.base import ClipboardBackend  # noqa: E402
from latexvector.config import Settings  # noqa: E402
from latexvector.exceptions import ExportError, RenderError  # noqa: E402
from latexvector.render.base import DisplaySurface, ExportWorker  # noqa: E402
from latexvector.services import ClipboardWatcher, FormulaSession  # noqa: E402


class FakeHandle:
    _ids = itertools.count()

    def __init__(self, when: float, callback, args) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.order = next(self._ids)
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Deterministic stand-in for the asyncio loop: time only moves on ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._scheduled: List[FakeHandle] = []

    def time(self) -> float:
        return self.now

    def call_soon(self, callback, *args) -> FakeHandle:
        return self.call_later(0, callback, *args)

    def call_soon_threadsafe(self, callback, *args) -> FakeHandle:
        return self.call_soon(callback, *args)

    def call_later(self, delay: float, callback, *args) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback, args)
        self._scheduled.append(handle)
        return handle

    def advance(self, seconds: float = 0.0) -> None:
        target = self.now + seconds
        while True:
            due = [h for h in self._scheduled if not h.cancelled and h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.order))
            self._scheduled.remove(handle)
            self.now = max(self.now, handle.when)
            handle.callback(*handle.args)
        self.now = target
        self._scheduled = [h for h in self._scheduled if not h.cancelled]

    def run_ready(self) -> None:
        self.advance(0.0)

    @property
    def pending(self) -> int:
        return len([h for h in self._scheduled if not h.cancelled])


class FakeClipboard(ClipboardBackend):

    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text
        self.written: List[bytes] = []
        self.notifications = 0
        self.fail_writes = False

    def _get_text(self) -> Optional[str]:
        return self.text

    def _set_pdf(self, payload: bytes) -> bool:
        if self.fail_writes:
            return False
        self.written.append(payload)
        self.text = None
        return True

    def notify_change(self) -> None:
        self.notifications += 1


class RecordingDisplay(DisplaySurface):

    def __init__(self) -> None:
        super().__init__()
        self.requests = []

    def show(self, request) -> None:
        self.requests.append(request)

    @property
    def last_formulas(self):
        return self.requests[-1].formulas if self.requests else None


class StubWorker(ExportWorker):
    """Export worker that renders nothing; ``bad`` formulas fail to typeset."""

    def __init__(self, loop, size: Optional[Tuple[float, float]] = (120.0, 40.0)) -> None:
        super().__init__(loop)
        self.size = size
        self.rendered: List[str] = []
        self._formula = None

    def render(self, formula: str) -> None:
        if formula == "bad":
            raise RenderError("cannot typeset")
        self._formula = formula
        self.rendered.append(formula)

    def measure(self) -> Tuple[float, float]:
        if self.size is None:
            raise ExportError("no bounding box")
        return self.size

    def create_pdf(self, width: float, height: float) -> bytes:
        return b"%PDF-1.4 " + self._formula.encode("utf-8")


@pytest.fixture
def loop():
    return FakeLoop()


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def watcher(clipboard):
    return ClipboardWatcher(clipboard)


@pytest.fixture
def session(loop, clipboard, settings):
    s = FormulaSession(loop, clipboard=clipboard, settings=settings)
    yield s
    s.close()
