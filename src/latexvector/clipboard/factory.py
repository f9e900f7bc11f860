"""
Platform-specific clipboard factory.

Picks the clipboard backend for the running operating system.
"""

import platform
from typing import Type

from latexvector.clipboard.base import ClipboardBackend
from latexvector.exceptions import ClipboardUnavailableError


def get_clipboard_class() -> Type[ClipboardBackend]:
    """
    Get the ClipboardBackend implementation for the current platform.

    Raises:
        ClipboardUnavailableError: If the current platform is not supported
    """
    system = platform.system()

    if system == "Windows":
        from latexvector.clipboard.windows import WindowsClipboard
        return WindowsClipboard
    elif system == "Linux":
        from latexvector.clipboard.linux import LinuxClipboard
        return LinuxClipboard
    elif system == "Darwin":
        from latexvector.clipboard.macos import MacOSClipboard
        return MacOSClipboard
    else:
        raise ClipboardUnavailableError(f"Platform '{system}' is not supported")


def get_clipboard_backend() -> ClipboardBackend:
    clipboard_class = get_clipboard_class()
    return clipboard_class()
