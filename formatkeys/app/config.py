from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

GLOBAL_CONFIG = Path(os.getenv("FORMATKEYS_CONFIG") or Path.home() / ".formatkeys_config.json")


def init_settings() -> None:
    GLOBAL_CONFIG.parent.mkdir(parents=True, exist_ok=True)


def _read_global_config() -> dict:
    """Return the parsed global config, or an empty dict on error/missing."""
    if not GLOBAL_CONFIG.exists():
        return {}
    try:
        payload = json.loads(GLOBAL_CONFIG.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _update_global_config(updates: dict) -> None:
    """Merge updates into global config file."""
    existing = _read_global_config()
    existing.update(updates)
    GLOBAL_CONFIG.write_text(json.dumps(existing, indent=2), encoding="utf-8")


def load_hotkey_overrides() -> dict[str, str]:
    """Return user chord overrides keyed by command id ('' unbinds a command)."""
    payload = _read_global_config()
    hotkeys = payload.get("hotkeys")
    if not isinstance(hotkeys, dict):
        return {}
    return {
        str(command_id): chord.strip()
        for command_id, chord in hotkeys.items()
        if isinstance(chord, str)
    }


def load_last_file() -> Optional[str]:
    payload = _read_global_config()
    last = payload.get("last_file")
    return last if isinstance(last, str) else None


def save_last_file(path: str) -> None:
    _update_global_config({"last_file": path})


def load_font_point_size(default: int = 12) -> int:
    """Return preferred editor font size."""
    payload = _read_global_config()
    size = payload.get("font_point_size")
    try:
        return max(6, int(size))
    except (TypeError, ValueError):
        return max(6, int(default))


def save_font_point_size(size: int) -> None:
    try:
        value = max(6, int(size))
    except (TypeError, ValueError):
        return
    _update_global_config({"font_point_size": value})
