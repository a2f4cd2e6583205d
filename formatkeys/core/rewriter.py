from __future__ import annotations

import re
from typing import Iterable

from .patterns import FormatPattern, INDENT, combine


def _strip_regex(strip: Iterable[FormatPattern]) -> re.Pattern[str]:
    # The empty alternative makes every line match, so each line gets exactly
    # one insertion point even when it carries no known prefix.
    body = combine(strip).body
    alternatives = f"{body}|" if body else ""
    return re.compile(rf"^(?P<indent>{INDENT})(?P<prefix>{alternatives})", re.MULTILINE)


def prefix_lines(
    content: str,
    prefix: str,
    strip: Iterable[FormatPattern] = (),
    preserve_indent: bool = False,
) -> str:
    """Give every line of ``content`` the ``prefix``, replacing any prefix in ``strip``.

    With ``preserve_indent`` each line is handled on its own: the indentation
    is split off, the first matching strip pattern is dropped and the new
    prefix goes between the two. Without it the same substitution runs once
    over the whole text, which is what the removal path uses.
    """
    regex = _strip_regex(strip)
    if preserve_indent:
        lines = content.split("\n")
        for index, line in enumerate(lines):
            m = regex.match(line)
            lines[index] = f"{m.group('indent')}{prefix}{line[m.end():]}"
        return "\n".join(lines)
    return regex.sub(lambda m: f"{m.group('indent')}{prefix}", content)


def strip_prefixes(content: str, patterns: Iterable[FormatPattern]) -> str:
    """Remove the first matching prefix from every line, keeping indentation."""
    return prefix_lines(content, "", strip=patterns, preserve_indent=False)
