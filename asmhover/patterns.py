"""Definition patterns for the supported label dialects.

Each pattern is anchored at line start. Group 1 ends where the symbol name
begins, which separates a definition from a reference on the same line.
Pattern text must stay valid for both Python ``re`` and ripgrep's PCRE2.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

KIND_COLON_LABEL = "label"
KIND_BARE_LABEL = "bare-label"
KIND_MODULE = "module"
KIND_MACRO = "macro"


@dataclass(frozen=True)
class LabelPattern:
    kind: str
    regex: re.Pattern[str]

    @property
    def source(self) -> str:
        return self.regex.pattern

    def name_column(self, line_text: str) -> int | None:
        """Column where the matched name starts, or ``None`` when not a definition."""
        match = self.regex.match(line_text)
        if match is None:
            return None
        return match.end(1)


def escape_symbol(name: str) -> str:
    """Escape ``name`` for literal use inside a pattern."""
    return re.escape(name)


def build_label_patterns(name: str) -> list[LabelPattern]:
    """Return colon-label, bare-label, module and macro patterns for ``name``."""
    if not name:
        raise ValueError("symbol name must not be empty")
    word = escape_symbol(name)
    return [
        # "label:" optionally indented and namespace qualified
        LabelPattern(KIND_COLON_LABEL, re.compile(r"^(\s*)[\w\.]*\b" + word + ":")),
        # sjasmplus label without colon; skip "label.x", "label_x" and "label:"
        LabelPattern(KIND_BARE_LABEL, re.compile(r"^()[\w\.]*\b" + word + r"\b(?![:\._])")),
        LabelPattern(KIND_MODULE, re.compile(r"^(\s+MODULE\s)" + word + r"\b")),
        LabelPattern(KIND_MACRO, re.compile(r"^(\s+MACRO\s)" + word + r"\b")),
    ]


def first_name_column(patterns: list[LabelPattern], line_text: str) -> int | None:
    """Leftmost name column among ``patterns`` matching ``line_text``."""
    columns = [col for col in (p.name_column(line_text) for p in patterns) if col is not None]
    return min(columns) if columns else None
