"""Label token classification at a cursor offset.

A complete label includes namespace dots and the local-label prefix, so
``.loop`` and ``MOD.entry`` come back whole. The search word is the plain
``\\w+`` run under the cursor, like an editor word range.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

LOCAL_LABEL_PREFIX = "."

_LABEL_CHAR_RE = re.compile(r"[\w.]")
_WORD_CHAR_RE = re.compile(r"\w")


@dataclass(frozen=True)
class CompleteLabel:
    label: str
    start: int


@dataclass(frozen=True)
class Token:
    """Symbol under the cursor for one hover request."""

    text: str
    word: str
    is_local: bool

    @property
    def is_empty(self) -> bool:
        return not self.text or not self.word


def _span_at(line_text: str, offset: int, char_re: re.Pattern[str]) -> tuple[int, int]:
    """Return ``[start, end)`` of the maximal ``char_re`` run touching ``offset``."""
    if not line_text:
        return 0, 0
    offset = max(0, min(offset, len(line_text)))
    # Cursor just after the last character still belongs to that token.
    if offset == len(line_text) or not char_re.match(line_text[offset]):
        if offset > 0 and char_re.match(line_text[offset - 1]):
            offset -= 1
        else:
            return offset, offset

    start = offset
    while start > 0 and char_re.match(line_text[start - 1]):
        start -= 1
    end = offset
    while end < len(line_text) and char_re.match(line_text[end]):
        end += 1
    return start, end


def get_complete_label(line_text: str, offset: int) -> CompleteLabel:
    start, end = _span_at(line_text, offset, _LABEL_CHAR_RE)
    return CompleteLabel(label=line_text[start:end], start=start)


def get_word(line_text: str, offset: int) -> str:
    start, end = _span_at(line_text, offset, _WORD_CHAR_RE)
    return line_text[start:end]


def classify_token(line_text: str, offset: int) -> Token:
    """Build the hover token for ``offset`` in ``line_text``.

    ``is_local`` is true iff the complete label starts with the local prefix.
    """
    complete = get_complete_label(line_text, offset)
    return Token(
        text=complete.label,
        word=get_word(line_text, offset),
        is_local=complete.label.startswith(LOCAL_LABEL_PREFIX),
    )
