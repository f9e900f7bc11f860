"""Exceptions raised inside LaTeX Vector.

None of these reach the user at runtime except configuration and platform
errors at startup; the rest are caught at the collaborator boundary and logged.
"""

from typing import Optional


class LatexVectorError(Exception):
    """Base exception class for LaTeX Vector."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error

    def __str__(self):
        base_msg = super().__str__()
        if self.original_error:
            return f"{base_msg} (Caused by: {type(self.original_error).__name__}: {self.original_error})"
        return base_msg


class ConfigError(LatexVectorError):
    """Invalid configuration value."""
    pass


class ClipboardUnavailableError(LatexVectorError):
    """No clipboard backend for the current platform."""
    pass


class RenderError(LatexVectorError):
    """The typesetting engine rejected a formula."""
    pass


class ExportError(LatexVectorError):
    """Rendered content could not be turned into PDF bytes."""
    pass
