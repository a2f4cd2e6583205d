from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .headings import MAX_HEADING_LEVEL, apply_heading, decrease_heading_level, increase_heading_level
from .selection import HostEditor
from .toggle import (
    BLOCKQUOTE_REQUEST,
    CHECKLIST_REQUEST,
    ORDERED_LIST_REQUEST,
    UNORDERED_LIST_REQUEST,
    FormatRequest,
    remove_formatting,
    toggle_prefix,
)


logger = logging.getLogger(__name__)

Handler = Callable[[HostEditor], None]
EditorProvider = Callable[[], Optional[HostEditor]]


@dataclass(frozen=True)
class CommandSpec:
    id: str
    name: str
    hotkey: Optional[str]
    callback: Handler


def toggle_command(request: FormatRequest) -> Handler:
    return lambda editor: toggle_prefix(editor, request)


def heading_command(level: int) -> Handler:
    return lambda editor: apply_heading(editor, level)


def default_commands() -> list[CommandSpec]:
    commands = [
        CommandSpec("toggle-checklist", "Toggle checklist for selection", "Ctrl+Shift+6", toggle_command(CHECKLIST_REQUEST)),
        CommandSpec("toggle-blockquote", "Toggle blockquote for selection", "Ctrl+Shift+9", toggle_command(BLOCKQUOTE_REQUEST)),
        CommandSpec("toggle-unordered-list", "Toggle bulleted list for selection", "Ctrl+Shift+8", toggle_command(UNORDERED_LIST_REQUEST)),
        CommandSpec("toggle-ordered-list", "Toggle numbered list for selection", "Ctrl+Shift+7", toggle_command(ORDERED_LIST_REQUEST)),
        CommandSpec("remove-formatting", "Remove formatting", "Ctrl+Alt+0", remove_formatting),
    ]
    for level in range(1, MAX_HEADING_LEVEL + 1):
        commands.append(
            CommandSpec(
                f"apply-heading-{level}",
                f"Apply Heading {level} to selection",
                f"Ctrl+Alt+{level}",
                heading_command(level),
            )
        )
    commands.append(CommandSpec("increase-heading-level", "Increase heading level", "Ctrl+Shift++", increase_heading_level))
    commands.append(CommandSpec("decrease-heading-level", "Decrease heading level", "Ctrl+Shift+-", decrease_heading_level))
    return commands


class FormatHotkeys:
    """Owns the command table for the lifetime of the host window.

    ``editor_provider`` returns the active editor or ``None``; commands run
    against whatever it returns at invocation time. ``hotkeys`` maps command
    ids to replacement chords, an empty string unbinds the command.
    """

    def __init__(self, editor_provider: EditorProvider, hotkeys: Optional[dict[str, str]] = None) -> None:
        self._editor_provider = editor_provider
        self._hotkeys = dict(hotkeys or {})
        self._commands: dict[str, CommandSpec] = {}

    @property
    def active(self) -> bool:
        return bool(self._commands)

    def start(self) -> None:
        logger.info("Loading...")
        self._commands.clear()
        for spec in default_commands():
            if spec.id in self._hotkeys:
                spec = replace(spec, hotkey=self._hotkeys[spec.id] or None)
            self._commands[spec.id] = spec
        logger.info("Loaded! %d commands registered", len(self._commands))

    def stop(self) -> None:
        self._commands.clear()
        logger.info("Cleanly shutdown")

    def commands(self) -> list[CommandSpec]:
        return list(self._commands.values())

    def command(self, command_id: str) -> CommandSpec:
        return self._commands[command_id]

    def run(self, command_id: str) -> bool:
        """Run a command against the active editor.

        Returns False when there is no editor or the plugin has been stopped.
        """
        if not self.active:
            logger.debug("Plugin stopped; ignoring %s", command_id)
            return False
        spec = self._commands[command_id]
        editor = self._editor_provider()
        if editor is None:
            logger.debug("No active editor; skipping %s", command_id)
            return False
        logger.debug("Running %s", command_id)
        spec.callback(editor)
        return True
