#!/usr/bin/env python3

import argparse
import asyncio
import logging
import sys
import threading
from pathlib import Path
from typing import Optional

from latexvector.clipboard import get_clipboard_backend
from latexvector.config import Settings
from latexvector.exceptions import LatexVectorError
from latexvector.extractor import extract
from latexvector.render import HtmlFileDisplay, MathtextExportWorker, TerminalDisplay
from latexvector.schemas import DisplayRequest
from latexvector.services import FormulaSession

logger = logging.getLogger(__name__)

HELP_TEXT = ("Commands: Enter or r re-read clipboard, <n> copy formula n, "
             "t <text> use text, l list, q quit")


class LatexVectorApp:

    def __init__(
        self,
        settings: Settings,
        html_path: Optional[Path] = None,
        watch: bool = True,
    ):
        self.settings = settings
        self.html_path = html_path
        self.watch = watch
        self.session: Optional[FormulaSession] = None
        self.display: Optional[TerminalDisplay] = None
        self.running = False

    def _build_session(self, loop: asyncio.AbstractEventLoop) -> FormulaSession:
        session = FormulaSession(loop, clipboard=get_clipboard_backend(), settings=self.settings)

        self.display = TerminalDisplay()
        session.attach_display(self.display)
        if self.html_path is not None:
            session.attach_display(HtmlFileDisplay(self.html_path))
            print(f"Preview page: {self.html_path.resolve().as_uri()}")

        session.attach_worker(MathtextExportWorker(
            loop,
            font_size=self.settings.font_size,
            scale=self.settings.render_scale,
            padding=self.settings.padding,
            fontset=self.settings.fontset,
            default_size=(self.settings.default_width, self.settings.default_height),
        ))
        session.toast_changed.connect(self._on_toast)
        return session

    def _on_toast(self, visible: bool) -> None:
        if visible:
            print("Copied")

    def handle_command(self, line: str) -> None:
        command = line.strip()
        if command in ("", "r"):
            self.session.read_clipboard(force=True)
        elif command == "q":
            self.running = False
        elif command == "l":
            self.display.show(DisplayRequest(formulas=self.session.formulas))
        elif command.isdigit():
            self.display.post_message(int(command))
        elif command.startswith("t "):
            self.session.set_text_input(command[2:])
        else:
            print(HELP_TEXT)

    def _read_commands(self, loop: asyncio.AbstractEventLoop, queue: "asyncio.Queue") -> None:
        while True:
            try:
                line = input()
            except EOFError:
                line = None
            try:
                loop.call_soon_threadsafe(queue.put_nowait, line)
            except RuntimeError:
                return
            if line is None:
                return

    async def run_interactive(self) -> None:
        loop = asyncio.get_running_loop()
        self.session = self._build_session(loop)
        self.running = True
        print("LaTeX Vector running. " + HELP_TEXT)

        commands: asyncio.Queue = asyncio.Queue()
        threading.Thread(target=self._read_commands, args=(loop, commands), daemon=True).start()

        try:
            self.session.read_clipboard(force=True)
            if self.watch:
                self.session.watcher.start(
                    dispatch=loop.call_soon_threadsafe,
                    poll_interval=self.settings.poll_interval,
                )

            while self.running:
                line = await commands.get()
                if line is None:
                    break
                self.handle_command(line)
        finally:
            self.stop()

    async def run_once(self, select: Optional[int] = None, timeout: float = 10.0) -> bool:
        loop = asyncio.get_running_loop()
        self.session = self._build_session(loop)
        done = asyncio.Event()
        self.session.exported.connect(lambda result: done.set())

        try:
            if self.session.read_clipboard(force=True) is None:
                print("Clipboard has no text.")
                return False
            self.session.flush_input()

            if not self.session.formulas:
                return False
            if select is not None:
                if not 0 <= select < self.session.extracted_count:
                    print(f"No formula [{select}], found {self.session.extracted_count}.")
                    return False
                self.session.select_formula(select)

            await asyncio.wait_for(done.wait(), timeout)
            return True
        except asyncio.TimeoutError:
            logger.error("Export did not finish within %ss", timeout)
            return False
        finally:
            self.stop()

    def stop(self) -> None:
        self.running = False
        if self.session is not None:
            self.session.close()


def run_extract(text: str) -> int:
    formulas = extract(text)
    for latex in formulas:
        print(" ".join(latex.split()))
    return 0 if formulas else 1


def formula_index(value: str) -> int:
    index = int(value)
    if index < 0:
        raise argparse.ArgumentTypeError(f"formula index must not be negative: {value}")
    return index


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="LaTeX Vector - copy LaTeX formulas from the clipboard back as PDF"
    )

    parser.add_argument(
        "-i", "--poll-interval",
        type=float,
        default=None,
        help="Seconds between activation reads of the clipboard (default: 0.5)"
    )

    parser.add_argument(
        "--no-watch",
        action="store_true",
        help="Only read the clipboard on start and on the r command"
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Read the clipboard, copy one formula as PDF and exit"
    )

    parser.add_argument(
        "--select",
        type=formula_index,
        default=None,
        metavar="N",
        help="With --once, copy formula N instead of the first"
    )

    parser.add_argument(
        "--extract",
        nargs="?",
        const="",
        default=None,
        metavar="TEXT",
        help="Print the formulas found in TEXT (or stdin) and exit"
    )

    parser.add_argument(
        "--html",
        type=Path,
        default=None,
        help="Also write a MathJax preview page to this path"
    )

    parser.add_argument(
        "-o", "--output-dir",
        type=Path,
        default=None,
        help="Keep a copy of every exported PDF in this directory"
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Read settings from this .env file (default: ./.env)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose debug logging"
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        settings = Settings.from_env(env_path=args.env_file).with_overrides(
            poll_interval=args.poll_interval,
            output_dir=args.output_dir,
        )
    except LatexVectorError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.exit(1)

    level = logging.DEBUG if args.verbose else settings.log_level
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')

    if args.extract is not None:
        text = args.extract or sys.stdin.read()
        sys.exit(run_extract(text))

    app = LatexVectorApp(settings, html_path=args.html, watch=not args.no_watch)

    try:
        if args.once:
            ok = asyncio.run(app.run_once(select=args.select))
            sys.exit(0 if ok else 1)
        asyncio.run(app.run_interactive())
    except LatexVectorError as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nStopping...")


if __name__ == "__main__":
    main()
