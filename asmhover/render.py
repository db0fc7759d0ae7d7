"""Terminal rendering of hover text.

Comment fragments are re-emitted as assembler comments and colored with
Pygments; the block separator stays plain.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import NasmLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .hover import HOVER_SEPARATOR

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda m: f"\\x{ord(m.group()):02x}", source)


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def render_hover(hover_texts: Sequence[str], no_color: bool = False, style: str = DEFAULT_STYLE) -> str:
    """Return printable hover output, one fragment per line."""
    lines = [sanitize_terminal_text(text) for text in hover_texts]
    if no_color:
        return "".join(line + "\n" for line in lines)

    formatter = _formatter_for_style(_normalize_style(style))
    lexer = NasmLexer()
    out: list[str] = []
    for line in lines:
        if line == HOVER_SEPARATOR:
            out.append(line + "\n")
            continue
        out.append(highlight(f"; {line}\n", lexer, formatter))
    return "".join(out)
