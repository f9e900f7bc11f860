"""PDF export through matplotlib's mathtext engine."""

import io
import logging
import math
import re
from typing import Tuple

import matplotlib
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.mathtext import MathTextParser

from latexvector.exceptions import ExportError, RenderError
from latexvector.render.base import ExportWorker

logger = logging.getLogger(__name__)

# Points per inch; figures are built at this dpi so pixels equal points.
POINTS_PER_INCH = 72


def prepare_expression(content: str) -> str:
    r"""
    Rewrites LaTeX that mathtext cannot parse as-is.
    1. Newlines become spaces (mathtext is single-line).
    2. \le and \ge become \leq and \geq without touching \left or \geq.
    3. \lvert / \rvert become plain bars.
    4. \bm becomes \mathbf and \displaystyle is dropped.
    """
    content = content.replace('\r', ' ').replace('\n', ' ')

    content = re.sub(r'\\le(?![a-zA-Z])', r'\\leq', content)
    content = re.sub(r'\\ge(?![a-zA-Z])', r'\\geq', content)

    content = content.replace(r'\left\lvert', r'\left|')
    content = content.replace(r'\right\rvert', r'\right|')
    content = content.replace(r'\lvert', '|')
    content = content.replace(r'\rvert', '|')

    content = re.sub(r'\\bm(?![a-zA-Z])', r'\\mathbf', content)
    content = re.sub(r'\\displaystyle(?![a-zA-Z])\s*', '', content)

    return content.strip()


class MathtextExportWorker(ExportWorker):

    def __init__(
        self,
        loop,
        font_size: float = 16.0,
        scale: float = 1.5,
        padding: float = 10.0,
        fontset: str = "stix",
        color: str = "black",
        default_size: Tuple[float, float] = (500.0, 200.0),
    ) -> None:
        super().__init__(loop, default_size=default_size)
        self.font_size = font_size
        self.scale = scale
        self.padding = padding
        self.fontset = fontset
        self.color = color
        self._parser = MathTextParser("path")
        self._expression = None

    @property
    def point_size(self) -> float:
        return self.font_size * self.scale

    def _rc(self):
        return matplotlib.rc_context({"mathtext.fontset": self.fontset})

    def render(self, formula: str) -> None:
        self._expression = None
        expression = f"${prepare_expression(formula)}$"
        try:
            with self._rc():
                self._parser.parse(expression)
        except ValueError as exc:
            raise RenderError("mathtext rejected the formula", exc)
        self._expression = expression

    def measure(self) -> Tuple[float, float]:
        if self._expression is None:
            raise ExportError("nothing has been rendered")

        try:
            with self._rc():
                fig = Figure(dpi=POINTS_PER_INCH)
                canvas = FigureCanvasAgg(fig)
                text = fig.text(0, 0, self._expression, fontsize=self.point_size, color=self.color)
                bbox = text.get_window_extent(renderer=canvas.get_renderer())
        except (ValueError, RuntimeError) as exc:
            raise ExportError("could not measure formula", exc)

        if bbox.width <= 0 or bbox.height <= 0:
            raise ExportError(f"empty bounding box {bbox.width}x{bbox.height}")

        return (
            math.ceil(bbox.width) + 2 * self.padding,
            math.ceil(bbox.height) + 2 * self.padding,
        )

    def create_pdf(self, width: float, height: float) -> bytes:
        if self._expression is None:
            raise ExportError("nothing has been rendered")

        buf = io.BytesIO()
        try:
            with self._rc():
                fig = Figure(figsize=(width / POINTS_PER_INCH, height / POINTS_PER_INCH),
                             dpi=POINTS_PER_INCH)
                FigureCanvasAgg(fig)
                fig.text(0.5, 0.5, self._expression, fontsize=self.point_size,
                         color=self.color, ha="center", va="center")
                fig.savefig(buf, format="pdf", transparent=True)
        except (ValueError, RuntimeError, OSError) as exc:
            raise ExportError("matplotlib could not write the PDF", exc)

        logger.debug("Exported %.0fx%.0fpt PDF (%d bytes)", width, height, buf.tell())
        return buf.getvalue()
