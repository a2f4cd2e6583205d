from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    line: int
    ch: int


class HostEditor(Protocol):
    """The capability surface a host editor has to offer."""

    def has_selection(self) -> bool: ...

    def get_selection_bounds(self) -> tuple[int, int, int, int]: ...

    def get_line(self, line: int) -> str: ...

    def get_caret(self) -> tuple[int, int]: ...

    def replace_range(self, text: str, from_pos: Position, to_pos: Position) -> None: ...

    def set_selection(self, from_pos: Position, to_pos: Position) -> None: ...

    def set_caret(self, pos: Position) -> None: ...


@dataclass(frozen=True)
class LineSpan:
    start_line: int
    end_line: int
    content: str


@dataclass(frozen=True)
class Selection:
    has_selection: bool
    span: LineSpan
    start: Position
    end: Position
    original_caret: Optional[Position] = None

    @property
    def content(self) -> str:
        return self.span.content


def _span_text(editor: HostEditor, start_line: int, end_line: int) -> str:
    return "\n".join(editor.get_line(i) for i in range(start_line, end_line + 1))


def get_selection(editor: HostEditor) -> Selection:
    """Capture the lines touched by the selection, or the caret line.

    A partial selection is widened to whole lines.
    """
    if editor.has_selection():
        from_line, _from_col, to_line, _to_col = editor.get_selection_bounds()
        if to_line < from_line:
            from_line, to_line = to_line, from_line
        content = _span_text(editor, from_line, to_line)
        last = editor.get_line(to_line)
        return Selection(
            has_selection=True,
            span=LineSpan(from_line, to_line, content),
            start=Position(from_line, 0),
            end=Position(to_line, len(last)),
        )
    line, col = editor.get_caret()
    content = editor.get_line(line)
    return Selection(
        has_selection=False,
        span=LineSpan(line, line, content),
        start=Position(line, 0),
        end=Position(line, len(content)),
        original_caret=Position(line, col),
    )


def _last_line(text: str) -> str:
    return text.split("\n")[-1]


def restore_cursor(selection: Selection, editor: HostEditor, original: str, updated: str) -> None:
    """Put the selection or caret back after ``original`` became ``updated``."""
    if selection.has_selection:
        end_line = selection.end.line
        editor.set_selection(selection.start, Position(end_line, len(editor.get_line(end_line))))
    elif selection.original_caret is not None:
        caret = selection.original_caret
        delta = len(_last_line(updated)) - len(_last_line(original))
        editor.set_caret(Position(caret.line, max(0, caret.ch + delta)))


def replace_span(editor: HostEditor, selection: Selection, updated: str) -> None:
    """Write ``updated`` over the captured span and reconcile the cursor."""
    original = selection.content
    editor.replace_range(updated, selection.start, selection.end)
    restore_cursor(selection, editor, original, updated)
    logger.debug(
        "Replaced lines %d-%d (%d -> %d chars)",
        selection.span.start_line,
        selection.span.end_line,
        len(original),
        len(updated),
    )
