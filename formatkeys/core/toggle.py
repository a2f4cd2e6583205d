from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .patterns import (
    BLOCKQUOTE,
    CHECKLIST,
    ORDERED_LIST,
    PREFIXES,
    UNORDERED_LIST,
    FormatPattern,
    combine,
    literal,
)
from .rewriter import prefix_lines, strip_prefixes
from .selection import HostEditor, get_selection, replace_span


logger = logging.getLogger(__name__)

UL_CHAR = "-"

Strategy = Callable[[str, "FormatRequest"], str]


@dataclass(frozen=True)
class FormatRequest:
    """One user-facing toggle: how to recognise the format and how to apply it.

    ``identify`` decides whether a line already has the format, ``exclusive``
    lists the families that are replaced rather than stacked on, and
    ``prefix`` is the literal marker the default add strategy inserts.
    """

    name: str
    identify: tuple[FormatPattern, ...] = ()
    exclusive: tuple[FormatPattern, ...] = ()
    prefix: str = ""
    add: Optional[Strategy] = None
    remove: Optional[Strategy] = None

    def identifying(self) -> tuple[FormatPattern, ...]:
        return self.identify or (literal(self.prefix),)


def add_prefix(content: str, request: FormatRequest) -> str:
    return prefix_lines(
        content,
        request.prefix,
        strip=request.identify + request.exclusive,
        preserve_indent=True,
    )


def remove_prefix(content: str, request: FormatRequest) -> str:
    return strip_prefixes(content, request.identifying())


def add_numbered(content: str, request: FormatRequest) -> str:
    """Number every line from 1, dropping any list marker it had."""
    strip = request.identify + request.exclusive
    lines = content.split("\n")
    for index, line in enumerate(lines):
        lines[index] = prefix_lines(line, f"{index + 1}. ", strip=strip, preserve_indent=True)
    return "\n".join(lines)


def all_lines_match(content: str, request: FormatRequest) -> bool:
    union = combine(request.identifying())
    return all(union.matches(line) for line in content.split("\n"))


def toggle_content(content: str, request: FormatRequest) -> str:
    """Remove the format when every line has it, otherwise add it."""
    if all_lines_match(content, request):
        logger.debug("%s: every line formatted, removing", request.name)
        return (request.remove or remove_prefix)(content, request)
    logger.debug("%s: adding", request.name)
    return (request.add or add_prefix)(content, request)


def toggle_prefix(editor: Optional[HostEditor], request: FormatRequest) -> None:
    if editor is None:
        return
    selection = get_selection(editor)
    replace_span(editor, selection, toggle_content(selection.content, request))


def apply_prefix(editor: Optional[HostEditor], request: FormatRequest) -> None:
    """Run the add strategy unconditionally."""
    if editor is None:
        return
    selection = get_selection(editor)
    replace_span(editor, selection, (request.add or add_prefix)(selection.content, request))


def remove_formatting(editor: Optional[HostEditor]) -> None:
    if editor is None:
        return
    selection = get_selection(editor)
    replace_span(editor, selection, strip_prefixes(selection.content, PREFIXES))


CHECKLIST_REQUEST = FormatRequest(
    "checklist",
    identify=(CHECKLIST,),
    exclusive=(ORDERED_LIST, UNORDERED_LIST),
    prefix=f"{UL_CHAR} [ ] ",
)
BLOCKQUOTE_REQUEST = FormatRequest("blockquote", identify=(BLOCKQUOTE,), prefix="> ")
UNORDERED_LIST_REQUEST = FormatRequest(
    "unordered-list",
    identify=(UNORDERED_LIST,),
    exclusive=(CHECKLIST, ORDERED_LIST),
    prefix=f"{UL_CHAR} ",
)
ORDERED_LIST_REQUEST = FormatRequest(
    "ordered-list",
    identify=(ORDERED_LIST,),
    exclusive=(CHECKLIST, UNORDERED_LIST),
    add=add_numbered,
)
