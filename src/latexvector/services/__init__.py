"""Service layer for LaTeX Vector."""

from .clipboard_service import ClipboardWatcher
from .debounce import Debouncer
from .session import FormulaSession

__all__ = ["ClipboardWatcher", "Debouncer", "FormulaSession"]
