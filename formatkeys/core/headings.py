from __future__ import annotations

from typing import Optional

from .patterns import PREFIXES, heading_level, split_indent
from .selection import HostEditor, get_selection, replace_span
from .toggle import FormatRequest, apply_prefix

MAX_HEADING_LEVEL = 6


def heading_prefix(level: int) -> str:
    level = min(max(level, 1), MAX_HEADING_LEVEL)
    return "#" * level + " "


def heading_request(level: int) -> FormatRequest:
    return FormatRequest(f"heading-{level}", exclusive=PREFIXES, prefix=heading_prefix(level))


def increase_line(line: str) -> str:
    level = heading_level(line)
    indent, rest = split_indent(line)
    if not level:
        return f"{indent}# {rest}"
    if level >= MAX_HEADING_LEVEL:
        return line
    return f"{indent}#{rest}"


def decrease_line(line: str) -> str:
    level = heading_level(line)
    if not level:
        return line
    indent, rest = split_indent(line)
    if level == 1:
        # drop the marker and its separator
        return indent + rest[2:]
    return indent + rest[1:]


def increase_content(content: str) -> str:
    return "\n".join(increase_line(line) for line in content.split("\n"))


def decrease_content(content: str) -> str:
    return "\n".join(decrease_line(line) for line in content.split("\n"))


def increase_heading_level(editor: Optional[HostEditor]) -> None:
    if editor is None:
        return
    selection = get_selection(editor)
    replace_span(editor, selection, increase_content(selection.content))


def decrease_heading_level(editor: Optional[HostEditor]) -> None:
    if editor is None:
        return
    selection = get_selection(editor)
    replace_span(editor, selection, decrease_content(selection.content))


def apply_heading(editor: Optional[HostEditor], level: int) -> None:
    """Make every line of the selection a heading of ``level``."""
    apply_prefix(editor, heading_request(level))
