"""
Cross-platform clipboard access.

Reads text and writes PDF data through a unified interface.
"""

from latexvector.clipboard.base import PDF_MIME, ClipboardBackend
from latexvector.clipboard.factory import get_clipboard_backend, get_clipboard_class

__all__ = [
    'PDF_MIME',
    'ClipboardBackend',
    'get_clipboard_backend',
    'get_clipboard_class',
]
