"""Documentation comments attached to a definition line."""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from .document import read_text_async, split_lines
from .search.reduce import Location

logger = logging.getLogger(__name__)

COMMENT_MARKER = ";"

_COMMENT_LINE_RE = re.compile(r"^\s*" + re.escape(COMMENT_MARKER) + r"(.*)")

TextLoader = Callable[[Path], Awaitable[str]]


def comment_block_from_lines(lines: Sequence[str], line: int) -> list[str]:
    """Collect the comment block for the definition at ``lines[line]``.

    Contiguous full-line comments directly above the definition come first,
    in source order; a trailing comment on the definition line itself is the
    last entry. Fragments are the text after ``;`` with whitespace trimmed.
    """
    if not 0 <= line < len(lines):
        return []

    block: list[str] = []
    definition = lines[line]
    if COMMENT_MARKER in definition:
        block.append(definition.split(COMMENT_MARKER, 1)[1].strip())

    idx = line - 1
    while idx >= 0:
        match = _COMMENT_LINE_RE.match(lines[idx])
        if match is None:
            break
        block.insert(0, match.group(1).strip())
        idx -= 1
    return block


async def extract_comment_block(location: Location, loader: TextLoader = read_text_async) -> list[str]:
    """Load the file behind ``location`` and return its comment block.

    An unreadable file contributes an empty block instead of failing the hover.
    """
    try:
        text = await loader(location.path)
    except OSError as exc:
        logger.warning("cannot read %s for hover: %s", location.path, exc)
        return []
    return comment_block_from_lines(split_lines(text), location.line)
