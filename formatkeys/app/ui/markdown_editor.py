from __future__ import annotations

from typing import Optional

from PySide6.QtGui import (
    QColor,
    QFont,
    QSyntaxHighlighter,
    QTextCharFormat,
    QTextCursor,
)
from PySide6.QtWidgets import QTextEdit

from formatkeys.core.patterns import BLOCKQUOTE, CHECKLIST, ORDERED_LIST, UNORDERED_LIST, combine, heading_match
from formatkeys.core.selection import Position

_LIST_MARKERS = combine((CHECKLIST, ORDERED_LIST, UNORDERED_LIST))
_QUOTE_MARKER = combine((BLOCKQUOTE,))


class MarkdownHighlighter(QSyntaxHighlighter):
    """Colours the block prefixes the format commands add and remove."""

    def __init__(self, parent) -> None:  # type: ignore[override]
        super().__init__(parent)
        self.heading_format = QTextCharFormat()
        self.heading_format.setForeground(QColor("#6cb4ff"))
        self.heading_format.setFontWeight(QFont.Weight.DemiBold)

        self.heading_styles = []
        for size in (26, 22, 18, 16, 14, 13):
            fmt = QTextCharFormat(self.heading_format)
            fmt.setFontPointSize(size)
            self.heading_styles.append(fmt)

        self.marker_format = QTextCharFormat()
        self.marker_format.setForeground(QColor("#888888"))

        self.quote_format = QTextCharFormat()
        self.quote_format.setForeground(QColor("#7fdbff"))
        self.quote_format.setFontItalic(True)

    def highlightBlock(self, text: str) -> None:  # type: ignore[override]
        m = heading_match(text)
        if m:
            level = len(m.group("hashes"))
            fmt = self.heading_styles[min(level, len(self.heading_styles)) - 1]
            self.setFormat(m.start("hashes"), len(text) - m.start("hashes"), fmt)
            return
        m = _QUOTE_MARKER.match(text)
        if m:
            self.setFormat(m.start("prefix"), len(text) - m.start("prefix"), self.quote_format)
            return
        m = _LIST_MARKERS.match(text)
        if m:
            self.setFormat(m.start("prefix"), m.end("prefix") - m.start("prefix"), self.marker_format)


class MarkdownEditor(QTextEdit):
    """Plain-text Markdown editor exposing the line/column surface the format commands use."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setAcceptRichText(False)
        self.setPlaceholderText("Open a Markdown file to begin editing…")
        self.setTabStopDistance(4 * self.fontMetrics().horizontalAdvance(" "))
        self.setLineWrapMode(QTextEdit.LineWrapMode.WidgetWidth)
        self.highlighter = MarkdownHighlighter(self.document())

    def set_markdown(self, content: str) -> None:
        self.setPlainText(content)

    def to_markdown(self) -> str:
        return self.toPlainText()

    def set_font_point_size(self, size: int) -> None:
        # Clamp to a sensible, positive point size to avoid Qt warnings
        try:
            safe_size = max(6, int(size))
        except (TypeError, ValueError):
            safe_size = 12
        font = self.font()
        font.setPointSize(safe_size)
        self.setFont(font)

    # --- position mapping ---

    def _offset(self, pos: Position) -> int:
        doc = self.document()
        block = doc.findBlockByNumber(min(max(pos.line, 0), doc.blockCount() - 1))
        return block.position() + min(max(pos.ch, 0), len(block.text()))

    def _position(self, offset: int) -> tuple[int, int]:
        block = self.document().findBlock(offset)
        return block.blockNumber(), offset - block.position()

    # --- host surface ---

    def has_selection(self) -> bool:
        return self.textCursor().hasSelection()

    def get_selection_bounds(self) -> tuple[int, int, int, int]:
        cursor = self.textCursor()
        from_line, from_col = self._position(cursor.selectionStart())
        to_line, to_col = self._position(cursor.selectionEnd())
        return from_line, from_col, to_line, to_col

    def get_line(self, line: int) -> str:
        block = self.document().findBlockByNumber(line)
        return block.text() if block.isValid() else ""

    def get_caret(self) -> tuple[int, int]:
        cursor = self.textCursor()
        return cursor.blockNumber(), cursor.positionInBlock()

    def replace_range(self, text: str, from_pos: Position, to_pos: Position) -> None:
        cursor = QTextCursor(self.document())
        cursor.beginEditBlock()
        cursor.setPosition(self._offset(from_pos))
        cursor.setPosition(self._offset(to_pos), QTextCursor.KeepAnchor)
        cursor.insertText(text)
        cursor.endEditBlock()

    def set_selection(self, from_pos: Position, to_pos: Optional[Position] = None) -> None:
        cursor = self.textCursor()
        cursor.setPosition(self._offset(from_pos))
        if to_pos is not None:
            cursor.setPosition(self._offset(to_pos), QTextCursor.KeepAnchor)
        self.setTextCursor(cursor)

    def set_caret(self, pos: Position) -> None:
        self.set_selection(pos)
