"""Display and export collaborators."""

from latexvector.render.base import DisplaySurface, ExportWorker
from latexvector.render.display import HtmlFileDisplay, TerminalDisplay
from latexvector.render.mathtext import MathtextExportWorker

__all__ = [
    'DisplaySurface',
    'ExportWorker',
    'HtmlFileDisplay',
    'MathtextExportWorker',
    'TerminalDisplay',
]
