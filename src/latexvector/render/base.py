import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple

from latexvector.exceptions import ExportError, RenderError
from latexvector.schemas import (
    DISPLAY_CHANNEL,
    WORKER_CHANNEL,
    DisplayRequest,
    ExportRequest,
    ExportResult,
    RenderComplete,
)

logger = logging.getLogger(__name__)


class DisplaySurface(ABC):
    """Shows the extracted formulas and reports which one the user picked."""

    channel = DISPLAY_CHANNEL

    def __init__(self) -> None:
        self._selection_handler: Optional[Callable[[Any], None]] = None

    def set_selection_handler(self, handler: Optional[Callable[[Any], None]]) -> None:
        self._selection_handler = handler

    @abstractmethod
    def show(self, request: DisplayRequest) -> None:
        pass

    def post_message(self, body: Any) -> None:
        """Deliver a message that arrived on the selection channel."""
        if self._selection_handler is None:
            logger.debug("No listener on %s, dropping %r", self.channel, body)
            return
        self._selection_handler(body)


class ExportWorker(ABC):
    """Renders one formula at a time and turns it into PDF bytes.

    ``load`` and ``export_pdf`` return immediately; the work runs on the
    owning event loop and completion arrives through callbacks. Loading a new
    request supersedes any request still in flight.
    """

    channel = WORKER_CHANNEL

    def __init__(self, loop, default_size: Tuple[float, float] = (500.0, 200.0)) -> None:
        self._loop = loop
        self.default_size = default_size
        self._completion_handler: Optional[Callable[[RenderComplete], None]] = None
        self._request: Optional[ExportRequest] = None

    @property
    def current_request(self) -> Optional[ExportRequest]:
        return self._request

    def set_completion_handler(self, handler: Optional[Callable[[RenderComplete], None]]) -> None:
        self._completion_handler = handler

    def load(self, request: ExportRequest) -> None:
        self._request = request
        self._loop.call_soon(self._render_request, request)

    def export_pdf(self, callback: Callable[[ExportResult], None]) -> None:
        request = self._request
        if request is None:
            return
        self._loop.call_soon(self._export_request, request, callback)

    @abstractmethod
    def render(self, formula: str) -> None:
        """Typeset ``formula``; raise ``RenderError`` if it cannot be."""

    @abstractmethod
    def measure(self) -> Tuple[float, float]:
        """Size of the rendered content in points; raise ``ExportError`` on failure."""

    @abstractmethod
    def create_pdf(self, width: float, height: float) -> bytes:
        pass

    def _render_request(self, request: ExportRequest) -> None:
        if request is not self._request:
            return
        try:
            self.render(request.formula)
        except RenderError as exc:
            logger.warning(f"Could not render {request.formula!r}: {exc}")
            return

        if self._completion_handler is not None:
            self._completion_handler(RenderComplete(requestId=request.requestId))

    def _export_request(self, request: ExportRequest, callback: Callable[[ExportResult], None]) -> None:
        if request is not self._request:
            return

        used_default = False
        try:
            width, height = self.measure()
            if width <= 0 or height <= 0:
                raise ExportError(f"empty bounding box {width}x{height}")
        except ExportError as exc:
            logger.debug(f"Measuring failed, using default size: {exc}")
            width, height = self.default_size
            used_default = True

        try:
            data = self.create_pdf(width, height)
        except ExportError as exc:
            logger.warning(f"PDF export failed: {exc}")
            return

        callback(ExportResult(
            requestId=request.requestId,
            data=data,
            width=width,
            height=height,
            usedDefaultRect=used_default,
        ))
