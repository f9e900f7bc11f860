import logging
import os
import shutil
import subprocess
from typing import Callable, List, Optional

from latexvector.clipboard.base import PDF_MIME, ClipboardBackend

logger = logging.getLogger(__name__)


class LinuxClipboard(ClipboardBackend):
    _TEXT_TARGETS = (
        "text/plain;charset=utf-8",
        "text/plain;charset=utf8",
        "utf8_string",
        "text/plain",
        "string",
    )

    def _get_text(self) -> Optional[str]:
        strategies = (
            self._from_wayland,
            self._from_xclip,
        )

        for strategy in strategies:
            try:
                result = strategy()
            except Exception:
                result = None
            if result is not None:
                return result

        return None

    def _from_wayland(self) -> Optional[str]:
        if not os.environ.get("WAYLAND_DISPLAY") or not shutil.which("wl-paste"):
            return None

        types = self._parse_type_list(
            self._run_command(["wl-paste", "--list-types"], timeout=1.5)
        )

        def reader(target: str) -> Optional[bytes]:
            return self._run_command(
                ["wl-paste", "--no-newline", "--type", target], timeout=1.5)

        return self._read_text_target(types, reader)

    def _from_xclip(self) -> Optional[str]:
        if not shutil.which("xclip"):
            return None

        types = self._parse_type_list(
            self._run_command(
                ["xclip", "-selection", "clipboard", "-t", "TARGETS", "-o"],
                timeout=1.5,
            )
        )

        def reader(target: str) -> Optional[bytes]:
            return self._run_command(
                ["xclip", "-selection", "clipboard", "-t", target, "-o"],
                timeout=1.5,
            )

        return self._read_text_target(types, reader)

    def _read_text_target(
        self,
        types: List[str],
        reader: Callable[[str], Optional[bytes]],
    ) -> Optional[str]:
        available = {target.lower(): target for target in types}
        for wanted in self._TEXT_TARGETS:
            target = available.get(wanted)
            if target is None:
                continue
            data = reader(target)
            if data:
                return data.decode("utf-8", errors="ignore")
        return None

    def _parse_type_list(self, data: Optional[bytes]) -> List[str]:
        if not data:
            return []
        text = data.decode("utf-8", errors="ignore")
        return [line.strip() for line in text.splitlines() if line.strip()]

    def _run_command(self, command: List[str], timeout: float) -> Optional[bytes]:
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=True,
                timeout=timeout,
            )
            return result.stdout
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
            return None

    def _set_pdf(self, payload: bytes) -> bool:
        if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
            command = ["wl-copy", "--type", PDF_MIME]
        elif shutil.which("xclip"):
            command = ["xclip", "-selection", "clipboard", "-t", PDF_MIME, "-i"]
        else:
            logger.warning("Neither wl-copy nor xclip is installed")
            return False

        try:
            subprocess.run(command, input=payload, check=True, timeout=2.0)
            return True
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as exc:
            logger.error(f"{command[0]} failed: {exc}")
            return False
