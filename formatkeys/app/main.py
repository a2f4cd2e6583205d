from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from formatkeys.app import config
from formatkeys.core.buffer import TextBuffer
from formatkeys.core.commands import FormatHotkeys, default_commands
from formatkeys.core.selection import Position


logger = logging.getLogger(__name__)

# ============================================================================
# FORMATKEYS_DEBUG - set to "1" or "true" for per-command debug logging
# ============================================================================


def _debug_enabled(var_name: str) -> bool:
    """Check if a debug flag is enabled."""
    return os.getenv(var_name, "0") not in ("0", "false", "False", "", None)


def _configure_logging() -> None:
    level = logging.DEBUG if _debug_enabled("FORMATKEYS_DEBUG") else logging.INFO
    logging.basicConfig(level=level, format="[%(name)s] %(levelname)s %(message)s")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Toggle Markdown block formatting.")
    parser.add_argument("file", nargs="?", help="Markdown file to open.")
    parser.add_argument(
        "--apply",
        metavar="COMMAND",
        choices=[spec.id for spec in default_commands()],
        help="Run one format command on FILE without opening a window.",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--lines", metavar="A:B", help="1-based inclusive line range to select.")
    target.add_argument("--caret", metavar="L:C", help="1-based line and 0-based column of the caret.")
    parser.add_argument("--in-place", action="store_true", help="Write the result back to FILE.")
    args = parser.parse_args(argv)
    if args.apply and not args.file:
        parser.error("--apply requires FILE")
    if (args.lines or args.caret or args.in_place) and not args.apply:
        parser.error("--lines, --caret and --in-place only apply with --apply")
    for name in ("lines", "caret"):
        raw = getattr(args, name)
        if raw is None:
            continue
        try:
            first, second = (int(part) for part in raw.split(":", 1))
        except ValueError:
            parser.error(f"--{name} expects two integers separated by ':' (got {raw!r})")
        setattr(args, name, (first, second))
    return args


def _select(buffer: TextBuffer, args: argparse.Namespace) -> None:
    last_line = buffer.line_count() - 1
    # a trailing newline is a file terminator, not a line to format
    if last_line > 0 and buffer.text.endswith("\n"):
        last_line -= 1
    if args.lines:
        first, last = args.lines
        first = min(max(first - 1, 0), last_line)
        last = min(max(last - 1, first), last_line)
        buffer.select_lines(first, last)
    elif args.caret:
        line, col = args.caret
        buffer.set_caret(Position(min(max(line - 1, 0), last_line), col))
    else:
        buffer.select_lines(0, last_line)


def run_headless(args: argparse.Namespace) -> int:
    path = Path(args.file)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"[formatkeys] Failed to read {path}: {exc}", file=sys.stderr)
        return 1
    buffer = TextBuffer(text)
    _select(buffer, args)
    plugin = FormatHotkeys(lambda: buffer)
    plugin.start()
    try:
        plugin.run(args.apply)
    finally:
        plugin.stop()
    if args.in_place:
        path.write_text(buffer.text, encoding="utf-8")
    else:
        sys.stdout.write(buffer.text)
        if not buffer.text.endswith("\n"):
            sys.stdout.write("\n")
    return 0


def run_gui(args: argparse.Namespace) -> int:
    from PySide6.QtWidgets import QApplication

    from formatkeys.app.ui.main_window import MainWindow

    config.init_settings()
    qt_app = QApplication(sys.argv)
    window = MainWindow(hotkeys=config.load_hotkey_overrides())
    window.resize(900, 700)
    start_file: Optional[str] = args.file or config.load_last_file()
    if start_file and Path(start_file).exists():
        window.open_file(start_file)
    window.show()
    rc = qt_app.exec()
    logger.info("Qt event loop exited with code %s", rc)
    return rc


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    _configure_logging()
    if args.apply:
        sys.exit(run_headless(args))
    sys.exit(run_gui(args))


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
