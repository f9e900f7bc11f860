from typing import Optional

try:
    from AppKit import (
        NSHapticFeedbackManager,
        NSHapticFeedbackPatternAlignment,
        NSHapticFeedbackPerformanceTimeDefault,
        NSPasteboard,
        NSPasteboardTypePDF,
        NSPasteboardTypeString,
    )
    from Foundation import NSData
    HAS_APPKIT = True
except ImportError:
    HAS_APPKIT = False

from latexvector.clipboard.base import ClipboardBackend


class MacOSClipboard(ClipboardBackend):

    def _get_text(self) -> Optional[str]:
        if not HAS_APPKIT:
            return None

        pasteboard = NSPasteboard.generalPasteboard()
        types = pasteboard.types() or []
        if NSPasteboardTypeString not in types:
            return None

        text = pasteboard.stringForType_(NSPasteboardTypeString)
        return str(text) if text is not None else None

    def _set_pdf(self, payload: bytes) -> bool:
        if not HAS_APPKIT:
            return False

        pasteboard = NSPasteboard.generalPasteboard()
        pasteboard.clearContents()
        ns_data = NSData.dataWithBytes_length_(payload, len(payload))
        return bool(pasteboard.setData_forType_(ns_data, NSPasteboardTypePDF))

    def notify_change(self) -> None:
        if not HAS_APPKIT:
            return
        try:
            NSHapticFeedbackManager.defaultPerformer().performFeedbackPattern_performanceTime_(
                NSHapticFeedbackPatternAlignment, NSHapticFeedbackPerformanceTimeDefault)
        except Exception:
            # Not every Mac has a force touch trackpad.
            pass
