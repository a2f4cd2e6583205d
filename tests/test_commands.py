"""Tests for the format command table and plugin lifecycle."""

import logging

import pytest

from formatkeys.core.buffer import TextBuffer
from formatkeys.core.commands import FormatHotkeys, default_commands, heading_command
from formatkeys.core.selection import Position

EXPECTED_IDS = {
    "toggle-checklist",
    "toggle-blockquote",
    "toggle-unordered-list",
    "toggle-ordered-list",
    "remove-formatting",
    "apply-heading-1",
    "apply-heading-2",
    "apply-heading-3",
    "apply-heading-4",
    "apply-heading-5",
    "apply-heading-6",
    "increase-heading-level",
    "decrease-heading-level",
}


def test_default_command_table():
    commands = default_commands()
    assert {spec.id for spec in commands} == EXPECTED_IDS
    assert len(commands) == len(EXPECTED_IDS)
    assert all(spec.hotkey for spec in commands)


def test_lifecycle_registers_and_clears(caplog):
    caplog.set_level(logging.INFO, logger="formatkeys.core.commands")
    plugin = FormatHotkeys(lambda: None)
    assert plugin.commands() == []
    plugin.start()
    assert plugin.active
    assert {spec.id for spec in plugin.commands()} == EXPECTED_IDS
    plugin.stop()
    assert not plugin.active
    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "Loading..."
    assert messages[-1] == "Cleanly shutdown"


def test_run_without_editor_is_skipped():
    plugin = FormatHotkeys(lambda: None)
    plugin.start()
    assert plugin.run("toggle-blockquote") is False


def test_run_against_active_editor():
    buffer = TextBuffer("x")
    buffer.set_caret(Position(0, 1))
    plugin = FormatHotkeys(lambda: buffer)
    plugin.start()
    assert plugin.run("toggle-blockquote") is True
    assert buffer.text == "> x"
    assert buffer.get_caret() == (0, 3)
    plugin.run("remove-formatting")
    assert buffer.text == "x"


@pytest.mark.parametrize("level", range(1, 7))
def test_heading_commands_bind_their_level(level):
    buffer = TextBuffer("- Title")
    plugin = FormatHotkeys(lambda: buffer)
    plugin.start()
    plugin.run(f"apply-heading-{level}")
    assert buffer.text == "#" * level + " Title"


def test_heading_command_factory():
    buffer = TextBuffer("x")
    heading_command(3)(buffer)
    assert buffer.text == "### x"


def test_hotkey_overrides():
    plugin = FormatHotkeys(lambda: None, {"toggle-checklist": "Ctrl+T", "remove-formatting": ""})
    plugin.start()
    assert plugin.command("toggle-checklist").hotkey == "Ctrl+T"
    assert plugin.command("remove-formatting").hotkey is None
    assert plugin.command("toggle-blockquote").hotkey == "Ctrl+Shift+9"


def test_unknown_command_raises():
    plugin = FormatHotkeys(lambda: None)
    plugin.start()
    with pytest.raises(KeyError):
        plugin.run("toggle-bold")


def test_run_after_stop_is_ignored():
    buffer = TextBuffer("x")
    plugin = FormatHotkeys(lambda: buffer)
    plugin.start()
    plugin.stop()
    assert plugin.run("toggle-blockquote") is False
    assert buffer.text == "x"
