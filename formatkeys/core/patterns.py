from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

INDENT = r"[ \t]*"


@dataclass(frozen=True)
class FormatPattern:
    """A line-prefix family such as "- " bullets or "> " quotes.

    ``fragment`` is matched right after the line's indentation. ``priority``
    orders overlapping families: lower values are tried first, so a checklist
    ("- [ ] ") wins over a plain bullet ("- ").
    """

    name: str
    fragment: str
    priority: int = 50


CHECKLIST = FormatPattern("checklist", r"[-*+] \[[ xX]\] ", priority=10)
ORDERED_LIST = FormatPattern("ordered-list", r"\d+[.)] ", priority=20)
UNORDERED_LIST = FormatPattern("unordered-list", r"[-*+] ", priority=30)
BLOCKQUOTE = FormatPattern("blockquote", r"> ?", priority=40)
HEADING = FormatPattern("heading", r"(?P<hashes>#+)[ \t]", priority=40)

PREFIXES: tuple[FormatPattern, ...] = (CHECKLIST, ORDERED_LIST, UNORDERED_LIST, BLOCKQUOTE, HEADING)

_HEADING_RE = re.compile(rf"^(?P<indent>{INDENT}){HEADING.fragment}")


class PatternUnion:
    """Ordered union of prefix patterns anchored after a line's indentation."""

    def __init__(self, patterns: Iterable[FormatPattern]) -> None:
        unique: dict[str, FormatPattern] = {}
        for pattern in patterns:
            unique.setdefault(pattern.fragment, pattern)
        self.patterns: tuple[FormatPattern, ...] = tuple(
            sorted(unique.values(), key=lambda p: p.priority)
        )
        # Named groups are only legal once per regex, so drop them in the union.
        alternatives = [re.sub(r"\(\?P<\w+>", "(?:", p.fragment) for p in self.patterns]
        self.body = "|".join(f"(?:{alt})" for alt in alternatives)
        self.regex = re.compile(
            rf"^(?P<indent>{INDENT})(?P<prefix>{self.body})" if self.body else r"(?!)",
            re.MULTILINE,
        )

    def __iter__(self):
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        names = ", ".join(p.name for p in self.patterns)
        return f"PatternUnion({names})"

    def match(self, line: str) -> Optional[re.Match[str]]:
        return self.regex.match(line)

    def matches(self, line: str) -> bool:
        return self.match(line) is not None

    def strip(self, line: str) -> str:
        """Remove the first matching prefix, keeping indentation. No match is a no-op."""
        m = self.match(line)
        if not m:
            return line
        return m.group("indent") + line[m.end():]


def combine(patterns: Iterable[FormatPattern]) -> PatternUnion:
    return PatternUnion(patterns)


def literal(prefix: str, name: str = "literal") -> FormatPattern:
    """Wrap a plain prefix string as a pattern."""
    return FormatPattern(name, re.escape(prefix))


def split_indent(line: str) -> tuple[str, str]:
    """Return (indent, rest) for a line."""
    stripped = line.lstrip(" \t")
    return line[: len(line) - len(stripped)], stripped


def heading_match(line: str) -> Optional[re.Match[str]]:
    return _HEADING_RE.match(line)


def heading_level(line: str) -> int:
    """Return the number of leading ``#`` characters of a heading line, or 0."""
    m = heading_match(line)
    return len(m.group("hashes")) if m else 0
