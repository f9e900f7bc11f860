"""Clipboard watcher for LaTeX Vector.

Reads the clipboard when something asks it to (app start, a user action, or
the optional activation poller) and publishes trimmed text as immutable
snapshots.
"""

import logging
import threading
from typing import Callable, Optional

from latexvector.clipboard import ClipboardBackend, get_clipboard_backend
from latexvector.models import ClipboardSnapshot
from latexvector.utils.signals import Signal

logger = logging.getLogger(__name__)


class ClipboardWatcher:
    """Change-detecting reader over a clipboard backend."""

    def __init__(
        self,
        backend: Optional[ClipboardBackend] = None,
        dispatch: Optional[Callable[[Callable[[], None]], None]] = None,
    ) -> None:
        self.backend = backend or get_clipboard_backend()
        # Default hand-over for poller reads, used when start() gets none.
        self.dispatch = dispatch
        # Every accepted read, forced or not.
        self.snapshot_read = Signal("snapshot_read")
        # Only reads whose text differs from the previous snapshot.
        self.content_changed = Signal("content_changed")

        self.current: Optional[ClipboardSnapshot] = None
        self.previous: Optional[ClipboardSnapshot] = None
        self._sequence = 0

        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._poll_thread: Optional[threading.Thread] = None
        self._dispatch: Optional[Callable[[Callable[[], None]], None]] = None
        self._is_running = False
        self.poll_interval = 0.5

    @property
    def is_running(self) -> bool:
        return self._is_running

    def read_clipboard(self, force: bool = False) -> Optional[ClipboardSnapshot]:
        """Read the clipboard and emit a snapshot if it is new or ``force`` is set.

        Returns the emitted snapshot, or ``None`` when nothing was emitted.
        """
        content = self.backend.read_text()
        if content is None:
            return None

        clean = content.strip()
        if not clean:
            return None

        last_text = self.current.text if self.current is not None else None
        changed = clean != last_text
        if not force and not changed:
            return None

        self._sequence += 1
        snapshot = ClipboardSnapshot.capture(clean, self._sequence)
        self.previous, self.current = self.current, snapshot

        if changed:
            logger.debug("Clipboard changed (#%d, %d chars)", snapshot.sequence, len(clean))
            self.backend.notify_change()
            self.content_changed.emit(snapshot)

        self.snapshot_read.emit(snapshot)
        return snapshot

    # ---------------------------------------------------------------------
    # Activation poller
    # ---------------------------------------------------------------------
    def start(
        self,
        dispatch: Optional[Callable[[Callable[[], None]], None]] = None,
        poll_interval: Optional[float] = None,
    ) -> None:
        """Start a background thread that triggers non-forced reads.

        ``dispatch`` hands each read over to the thread that owns the watcher,
        e.g. ``loop.call_soon_threadsafe``, and defaults to the one given at
        construction. With neither, the read runs on the poll thread.
        """
        with self._lock:
            if self._is_running:
                logger.debug("Activation poller already running")
                return

            if poll_interval is not None:
                self.poll_interval = poll_interval
            self._dispatch = dispatch or self.dispatch
            logger.info("Starting activation poller (interval=%ss)", self.poll_interval)
            self._stop_event.clear()
            self._is_running = True
            self._poll_thread = threading.Thread(target=self._poll_loop, daemon=True)
            self._poll_thread.start()

    def stop(self) -> None:
        with self._lock:
            if not self._is_running:
                return

            logger.info("Stopping activation poller")
            self._is_running = False
            self._stop_event.set()

        if self._poll_thread is not None:
            self._poll_thread.join(timeout=1.0)
            self._poll_thread = None

    def _poll_loop(self) -> None:
        while not self._stop_event.wait(self.poll_interval):
            try:
                if self._dispatch is not None:
                    self._dispatch(self.read_clipboard)
                else:
                    self.read_clipboard()
            except RuntimeError:
                # The loop we dispatch to has been closed.
                logger.debug("Dispatch target gone, stopping poller")
                break
            except Exception:
                logger.exception("Error while polling the clipboard")
        self._is_running = False

    def __enter__(self) -> "ClipboardWatcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
