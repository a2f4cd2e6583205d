from __future__ import annotations

from typing import Optional

from .selection import Position


class TextBuffer:
    """Plain-text host editor used by the headless CLI and the tests."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self._anchor = Position(0, 0)
        self._head = Position(0, 0)

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    def line_count(self) -> int:
        return len(self.lines)

    def _offset(self, pos: Position) -> int:
        lines = self.lines
        line = min(max(pos.line, 0), len(lines) - 1)
        ch = min(max(pos.ch, 0), len(lines[line]))
        return sum(len(l) + 1 for l in lines[:line]) + ch

    def _clamp(self, pos: Position) -> Position:
        lines = self.lines
        line = min(max(pos.line, 0), len(lines) - 1)
        return Position(line, min(max(pos.ch, 0), len(lines[line])))

    # -- host surface -------------------------------------------------

    def has_selection(self) -> bool:
        return self._anchor != self._head

    def get_selection_bounds(self) -> tuple[int, int, int, int]:
        first, second = sorted((self._anchor, self._head), key=lambda p: (p.line, p.ch))
        return first.line, first.ch, second.line, second.ch

    def get_line(self, line: int) -> str:
        return self.lines[line]

    def get_caret(self) -> tuple[int, int]:
        return self._head.line, self._head.ch

    def replace_range(self, text: str, from_pos: Position, to_pos: Position) -> None:
        start, end = self._offset(from_pos), self._offset(to_pos)
        self.text = self.text[:start] + text + self.text[end:]

    def set_selection(self, from_pos: Position, to_pos: Optional[Position] = None) -> None:
        self._anchor = self._clamp(from_pos)
        self._head = self._clamp(to_pos if to_pos is not None else from_pos)

    def set_caret(self, pos: Position) -> None:
        self.set_selection(pos)

    # -- convenience ----------------------------------------------------

    def select_lines(self, first: int, last: int) -> None:
        """Select ``first`` through ``last`` (inclusive) as whole lines."""
        self.set_selection(Position(first, 0), Position(last, len(self.get_line(last))))

    def selection_positions(self) -> tuple[Position, Position]:
        return self._anchor, self._head
