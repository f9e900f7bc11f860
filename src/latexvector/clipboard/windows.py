import logging
import time
from typing import Optional

import win32clipboard as wc

from latexvector.clipboard.base import ClipboardBackend

logger = logging.getLogger(__name__)

# Name Acrobat and Office register for PDF clipboard data.
PDF_FORMAT_NAME = "Portable Document Format"


class WindowsClipboard(ClipboardBackend):
    """Windows implementation on top of pywin32's ``win32clipboard``."""

    def _open(self) -> bool:
        for _ in range(3):
            try:
                wc.OpenClipboard()
                return True
            except Exception:
                time.sleep(0.05)
        return False

    def _get_text(self) -> Optional[str]:
        if not self._open():
            return None
        try:
            if not wc.IsClipboardFormatAvailable(wc.CF_UNICODETEXT):
                return None
            return wc.GetClipboardData(wc.CF_UNICODETEXT)
        finally:
            try:
                wc.CloseClipboard()
            except Exception:
                pass

    def _set_pdf(self, payload: bytes) -> bool:
        if not self._open():
            logger.warning("Clipboard is held by another application")
            return False
        try:
            pdf_format = wc.RegisterClipboardFormat(PDF_FORMAT_NAME)
            wc.EmptyClipboard()
            wc.SetClipboardData(pdf_format, payload)
            return True
        finally:
            try:
                wc.CloseClipboard()
            except Exception:
                pass
