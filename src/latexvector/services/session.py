"""Formula session: the state owner between clipboard, extractor and renderers.

Everything here runs on one event loop. Collaborators are attached after
construction; requests made before that are dropped, not queued.
"""

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from latexvector.clipboard import ClipboardBackend
from latexvector.config import Settings
from latexvector.models import ClipboardSnapshot, ExtractionResult
from latexvector.render.base import DisplaySurface, ExportWorker
from latexvector.schemas import DisplayRequest, ExportRequest, ExportResult, ItemSelected, RenderComplete
from latexvector.services.clipboard_service import ClipboardWatcher
from latexvector.services.debounce import Debouncer
from latexvector.utils.file_manager import FileManager
from latexvector.utils.signals import Signal

logger = logging.getLogger(__name__)


class FormulaSession:

    def __init__(
        self,
        loop,
        clipboard: Optional[ClipboardBackend] = None,
        settings: Optional[Settings] = None,
        watcher: Optional[ClipboardWatcher] = None,
        file_manager: Optional[FileManager] = None,
    ) -> None:
        self._loop = loop
        self.settings = settings or Settings()
        self.watcher = watcher or ClipboardWatcher(clipboard)
        if self.watcher.dispatch is None:
            # Poller reads must land on the loop thread.
            self.watcher.dispatch = loop.call_soon_threadsafe
        self.clipboard = clipboard or self.watcher.backend
        self.file_manager = file_manager
        if self.file_manager is None and self.settings.output_dir is not None:
            self.file_manager = FileManager(self.settings.output_dir)

        self.text_input = ""
        self.result = ExtractionResult()
        self.show_success_toast = False

        self.displays: List[DisplaySurface] = []
        self.worker: Optional[ExportWorker] = None

        self.text_changed = Signal("text_changed")
        self.formulas_changed = Signal("formulas_changed")
        self.toast_changed = Signal("toast_changed")
        self.exported = Signal("exported")

        self._debouncer = Debouncer(loop, self.settings.debounce_seconds, self.process_input)
        self._toast_handle = None
        self.watcher.snapshot_read.connect(self._on_snapshot)

    @property
    def formulas(self) -> List[str]:
        return list(self.result.formulas)

    @property
    def extracted_count(self) -> int:
        return len(self.result)

    # ---------------------------------------------------------------------
    # Input
    # ---------------------------------------------------------------------
    def read_clipboard(self, force: bool = False) -> Optional[ClipboardSnapshot]:
        return self.watcher.read_clipboard(force=force)

    def _on_snapshot(self, snapshot: ClipboardSnapshot) -> None:
        self.set_text_input(snapshot.text)

    def set_text_input(self, text: str) -> None:
        self.text_input = text
        self.text_changed.emit(text)
        self._debouncer.submit(text)

    def flush_input(self) -> None:
        """Run extraction for pending input now instead of after the quiet period."""
        self._debouncer.flush()

    def process_input(self, text: str) -> None:
        self.result = ExtractionResult.from_text(text)
        logger.debug("Extracted %d formula(s)", self.extracted_count)
        self.formulas_changed.emit(self.formulas)
        self._update_displays()
        if self.result.first is not None:
            self.copy_formula(self.result.first)

    # ---------------------------------------------------------------------
    # Collaborators
    # ---------------------------------------------------------------------
    def attach_display(self, display: DisplaySurface) -> None:
        display.set_selection_handler(self.select_formula)
        self.displays.append(display)
        display.show(DisplayRequest(formulas=self.formulas))

    def attach_worker(self, worker: ExportWorker) -> None:
        worker.set_completion_handler(self._on_render_complete)
        self.worker = worker

    def _update_displays(self) -> None:
        if not self.displays:
            return
        request = DisplayRequest(formulas=self.formulas)
        for display in self.displays:
            display.show(request)

    def select_formula(self, index: Any) -> None:
        try:
            event = ItemSelected.model_validate({"index": index})
        except ValidationError:
            logger.debug("Ignoring invalid selection %r", index)
            return
        if event.index >= self.extracted_count:
            logger.debug("Selection %d out of range", event.index)
            return
        self.copy_formula(self.result[event.index])

    def copy_formula(self, latex: str) -> None:
        if self.worker is None:
            logger.debug("No export worker attached, dropping request")
            return
        self.worker.load(ExportRequest(formula=latex))

    def _on_render_complete(self, message: RenderComplete) -> None:
        if self.worker is None:
            return
        self.worker.export_pdf(self._on_export_finished)

    def _on_export_finished(self, result: ExportResult) -> None:
        if not self.clipboard.write_pdf(result.data):
            logger.warning("Could not place the PDF on the clipboard")
            return

        logger.info("Copied %.0fx%.0fpt PDF to the clipboard", result.width, result.height)
        if self.file_manager is not None:
            self.file_manager.save_pdf(result.data, f"{result.requestId}.pdf")
        self.trigger_success_feedback()
        self.exported.emit(result)

    # ---------------------------------------------------------------------
    # Feedback
    # ---------------------------------------------------------------------
    def trigger_success_feedback(self) -> None:
        if self._toast_handle is not None:
            self._toast_handle.cancel()
        self._set_toast(True)
        self._toast_handle = self._loop.call_later(self.settings.toast_seconds, self._clear_toast)

    def _clear_toast(self) -> None:
        self._toast_handle = None
        self._set_toast(False)

    def _set_toast(self, visible: bool) -> None:
        if self.show_success_toast == visible:
            return
        self.show_success_toast = visible
        self.toast_changed.emit(visible)

    def close(self) -> None:
        self._debouncer.cancel()
        if self._toast_handle is not None:
            self._toast_handle.cancel()
            self._toast_handle = None
        self.watcher.stop()
        self.watcher.snapshot_read.disconnect(self._on_snapshot)
        for display in self.displays:
            display.set_selection_handler(None)
        if self.worker is not None:
            self.worker.set_completion_handler(None)
