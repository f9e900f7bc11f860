import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"


class ClipboardBackend(ABC):

    @abstractmethod
    def _get_text(self) -> Optional[str]:
        pass

    @abstractmethod
    def _set_pdf(self, payload: bytes) -> bool:
        pass

    def read_text(self) -> Optional[str]:
        try:
            return self._get_text()
        except Exception as exc:
            logger.debug(f"Clipboard read failed: {exc}")
            return None

    def write_pdf(self, payload: bytes) -> bool:
        """Replace the clipboard contents with ``payload`` as a PDF."""
        if not payload:
            return False
        try:
            return self._set_pdf(payload)
        except Exception as exc:
            logger.error(f"Clipboard write failed: {exc}")
            return False

    def notify_change(self) -> None:
        """Tactile or audible cue for new clipboard content. No-op by default."""
        return None
