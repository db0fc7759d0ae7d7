"""Persistent JSON config helpers.

Reads the hover toggle and project-search preferences. The file is edited by
hand; malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "asmhover"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_FILE_GLOBS = ("*.asm", "*.inc", "*.s", "*.a80", "*.z80")
DEFAULT_MAX_MATCHES = 2_000


@dataclass(frozen=True)
class HoverSettings:
    enable_hover_provider: bool = True
    file_globs: tuple[str, ...] = DEFAULT_FILE_GLOBS
    show_hidden: bool = False
    skip_gitignored: bool = True
    max_matches: int = DEFAULT_MAX_MATCHES


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    """Only explicit booleans are accepted; anything else yields ``default``."""
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _load_globs(data: dict[str, object]) -> tuple[str, ...]:
    value = data.get("file_globs")
    if not isinstance(value, list):
        return DEFAULT_FILE_GLOBS
    globs = tuple(item.strip() for item in value if isinstance(item, str) and item.strip())
    return globs if globs else DEFAULT_FILE_GLOBS


def _load_positive_int(data: dict[str, object], key: str, default: int) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_settings() -> HoverSettings:
    """Read hover settings, sanitizing each key independently."""
    data = load_config()
    return HoverSettings(
        enable_hover_provider=_load_bool(data, "enable_hover_provider", True),
        file_globs=_load_globs(data),
        show_hidden=_load_bool(data, "show_hidden", False),
        skip_gitignored=_load_bool(data, "skip_gitignored", True),
        max_matches=_load_positive_int(data, "max_matches", DEFAULT_MAX_MATCHES),
    )

