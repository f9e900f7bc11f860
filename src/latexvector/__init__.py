"""LaTeX Vector: turn LaTeX on the clipboard into PDF vector graphics."""

from latexvector.extractor import extract, sanitize

__version__ = "0.1.0"

__all__ = ["extract", "sanitize", "__version__"]
