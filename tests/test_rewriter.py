"""Tests for per-line prefix rewriting and indentation handling."""

import pytest

from formatkeys.core.patterns import BLOCKQUOTE, ORDERED_LIST, PREFIXES, UNORDERED_LIST
from formatkeys.core.rewriter import prefix_lines, strip_prefixes


def test_prefix_every_line():
    assert prefix_lines("a\n  b", "- ", preserve_indent=True) == "- a\n  - b"


def test_existing_prefix_is_replaced_not_stacked():
    content = "  * old\n1. two"
    result = prefix_lines(content, "- ", strip=(UNORDERED_LIST, ORDERED_LIST), preserve_indent=True)
    assert result == "  - old\n- two"


def test_same_prefix_is_not_duplicated():
    assert prefix_lines("> quote", "> ", strip=(BLOCKQUOTE,), preserve_indent=True) == "> quote"


def test_unlisted_prefix_is_kept():
    assert prefix_lines("> quote", "- ", strip=(ORDERED_LIST,), preserve_indent=True) == "- > quote"


@pytest.mark.parametrize("indent", ["", "  ", "\t", " \t "])
@pytest.mark.parametrize("body", ["x", "- x", "## x", "1. x", "- [ ] x"])
def test_indentation_is_preserved(indent, body):
    result = prefix_lines(indent + body, "> ", strip=PREFIXES, preserve_indent=True)
    assert result == f"{indent}> x"


def test_empty_content_gets_prefix():
    assert prefix_lines("", "- ", preserve_indent=True) == "- "


def test_single_pass_removal():
    assert prefix_lines("1. a\n2. b", "", strip=(ORDERED_LIST,)) == "a\nb"


def test_strip_prefixes_keeps_indent_and_blank_lines():
    assert strip_prefixes("  - a\n\n> b\nplain", PREFIXES) == "  a\n\nb\nplain"
