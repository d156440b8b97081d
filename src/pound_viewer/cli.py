"""Command-line entry point: ``pound [FILE]``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from pound_viewer import __version__
from pound_viewer.buffer import Document, DocumentLoadError
from pound_viewer.config import UI_CHOICES, ViewerConfig
from pound_viewer.runtime import telemetry
from pound_viewer.session import ViewerSession
from pound_viewer.terminal import RawTerminal, TerminalError

PROG = "pound"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="View a text file in the terminal. Arrow keys move, "
        "Home/End jump to the first/last row, Ctrl+Q quits.",
    )
    parser.add_argument("path", nargs="?", help="File to open (omit for an empty buffer)")
    parser.add_argument(
        "--ui",
        choices=UI_CHOICES,
        default=None,
        help="Host to run in (default: terminal, or $POUND_UI)",
    )
    parser.add_argument(
        "--quit-key",
        default=None,
        metavar="LETTER",
        help="Letter combined with Ctrl to quit, other than h, i, j or m (default: q)",
    )
    parser.add_argument(
        "--poll-ms",
        type=int,
        default=None,
        help="Input poll interval in milliseconds (default: 500)",
    )
    parser.add_argument("--encoding", default=None, help="File encoding (default: utf-8)")
    parser.add_argument("--log-file", default=None, help="Write telemetry to this file")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Minimum log level: debug, info, warning, error or critical",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _fail(message: str) -> int:
    print(f"{PROG}: {message}", file=sys.stderr)
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = ViewerConfig.from_env().merged(
            ui=args.ui,
            quit_key=args.quit_key,
            poll_ms=args.poll_ms,
            encoding=args.encoding,
            log_file=args.log_file,
            log_level=args.log_level,
        )
    except ValueError as exc:
        parser.error(str(exc))

    telemetry.configure(level=config.log_level, log_file=config.log_file)

    try:
        if args.path is None:
            document = Document.empty()
        else:
            document = Document.open(args.path, encoding=config.encoding)
    except DocumentLoadError as exc:
        return _fail(str(exc))

    if config.ui == "textual":
        from pound_viewer.adapters.textual.app import run_textual

        run_textual(document, quit_key=config.quit_key)
        return 0

    try:
        with RawTerminal(poll_ms=config.poll_ms) as terminal:
            ViewerSession(document, terminal, quit_key=config.quit_key).run()
    except TerminalError as exc:
        return _fail(str(exc))
    except KeyboardInterrupt:
        # Raw mode delivers Ctrl+C as a key; this only fires outside it.
        return 130
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
