import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from latexvector.render.base import DisplaySurface
from latexvector.render.templates import display_html
from latexvector.schemas import DisplayRequest

logger = logging.getLogger(__name__)


class TerminalDisplay(DisplaySurface):
    """Numbered formula list on a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__()
        self.stream = stream or sys.stdout

    def show(self, request: DisplayRequest) -> None:
        if not request.formulas:
            self.stream.write("No formulas found.\n")
        else:
            self.stream.write(f"{len(request.formulas)} formula(s):\n")
            for index, latex in enumerate(request.formulas):
                one_line = " ".join(latex.split())
                self.stream.write(f"  [{index}] {one_line}\n")
        self.stream.flush()


class HtmlFileDisplay(DisplaySurface):
    """Writes the MathJax preview page to a file on every update."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)

    def show(self, request: DisplayRequest) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(display_html(request.formulas), encoding="utf-8")
        except OSError as exc:
            logger.error(f"Could not write preview page {self.path}: {exc}")
            return
        logger.debug("Preview page updated: %s", self.path.resolve().as_uri())
