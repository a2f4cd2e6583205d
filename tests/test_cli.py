"""Tests for the headless --apply command line mode."""

import pytest

from formatkeys.app import main as cli


def _run(argv):
    return cli.run_headless(cli._parse_args(argv))


def test_whole_file_ignores_trailing_newline(tmp_path, capsys):
    path = tmp_path / "notes.md"
    path.write_text("a\nb\n", encoding="utf-8")
    assert _run([str(path), "--apply", "toggle-ordered-list"]) == 0
    assert capsys.readouterr().out == "1. a\n2. b\n"


def test_line_range(tmp_path, capsys):
    path = tmp_path / "notes.md"
    path.write_text("a\nb\nc", encoding="utf-8")
    _run([str(path), "--apply", "toggle-unordered-list", "--lines", "2:2"])
    assert capsys.readouterr().out == "a\n- b\nc\n"


def test_caret_line(tmp_path, capsys):
    path = tmp_path / "notes.md"
    path.write_text("x\ny", encoding="utf-8")
    _run([str(path), "--apply", "apply-heading-2", "--caret", "1:0"])
    assert capsys.readouterr().out == "## x\ny\n"


def test_in_place(tmp_path, capsys):
    path = tmp_path / "notes.md"
    path.write_text("- [ ] a\n- [ ] b\n", encoding="utf-8")
    _run([str(path), "--apply", "toggle-checklist", "--in-place"])
    assert path.read_text(encoding="utf-8") == "a\nb\n"
    assert capsys.readouterr().out == ""


def test_missing_file_reports_error(tmp_path, capsys):
    assert _run([str(tmp_path / "missing.md"), "--apply", "toggle-blockquote"]) == 1
    assert "Failed to read" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["--apply", "toggle-blockquote"],
        ["notes.md", "--apply", "toggle-bold"],
        ["notes.md", "--apply", "toggle-blockquote", "--lines", "x"],
        ["notes.md", "--lines", "1:2"],
        ["notes.md", "--apply", "toggle-blockquote", "--lines", "1:2", "--caret", "1:0"],
    ],
)
def test_invalid_arguments(argv):
    with pytest.raises(SystemExit):
        cli._parse_args(argv)


def test_main_exits_with_headless_status(tmp_path, capsys):
    path = tmp_path / "notes.md"
    path.write_text("Title", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(path), "--apply", "increase-heading-level"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "# Title\n"
