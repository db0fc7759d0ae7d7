"""Hover resolution for assembler labels.

Pipeline: classify the token under the cursor, build the definition patterns,
search and reduce candidate locations, then collect each location's comment
block one file at a time so the output order is deterministic.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from .comments import extract_comment_block
from .config import HoverSettings
from .document import Document, Position
from .labels import classify_token
from .patterns import build_label_patterns
from .search.candidates import (
    DefaultLocationReducer,
    LocationReducer,
    ProjectSymbolSearcher,
    SymbolSearcher,
    find_candidate_locations,
)
from .search.reduce import Location

logger = logging.getLogger(__name__)

HOVER_SEPARATOR = "============"

BlockExtractor = Callable[[Location], Awaitable[list[str]]]


async def assemble_hover(
    locations: Sequence[Location],
    extract: BlockExtractor = extract_comment_block,
    cancel_event: asyncio.Event | None = None,
) -> list[str] | None:
    """Concatenate comment blocks of ``locations`` in order.

    Blocks are separated by ``HOVER_SEPARATOR``; locations without comments
    add nothing. Returns ``None`` when no location had comment text or when
    ``cancel_event`` gets set before a file load.
    """
    hover_texts: list[str] = []
    for location in locations:
        if cancel_event is not None and cancel_event.is_set():
            logger.debug("hover cancelled before loading %s", location.path)
            return None
        block = await extract(location)
        if not block:
            continue
        hover_texts.append(HOVER_SEPARATOR)
        hover_texts.extend(block)

    if not hover_texts:
        return None
    # Every block was preceded by a separator; the first one has nothing to separate.
    del hover_texts[0]
    return hover_texts


async def resolve_hover(
    document: Document,
    position: Position,
    searcher: SymbolSearcher | None = None,
    reducer: LocationReducer | None = None,
    settings: HoverSettings | None = None,
    cancel_event: asyncio.Event | None = None,
) -> list[str] | None:
    """Return the documentation lines for the symbol at ``position``.

    Local labels, positions outside a label, symbols without definitions, and
    definitions without comments all yield ``None``.
    """
    token = classify_token(document.line_at(position.line), position.character)
    if token.is_local:
        logger.debug("local label %r is not resolved", token.text)
        return None
    if token.is_empty:
        return None

    if searcher is None:
        searcher = ProjectSymbolSearcher(document.path.parent, settings)
    if reducer is None:
        reducer = DefaultLocationReducer()

    patterns = build_label_patterns(token.word)
    locations = await find_candidate_locations(patterns, document, position, searcher, reducer)
    if not locations:
        logger.debug("no definition found for %r", token.word)
        return None
    return await assemble_hover(locations, cancel_event=cancel_event)


class HoverProvider:
    """Host-facing hover entry point gated by ``enable_hover_provider``."""

    def __init__(self, root: Path, settings: HoverSettings | None = None) -> None:
        self.settings = settings or HoverSettings()
        self.searcher = ProjectSymbolSearcher(root, self.settings)
        self.reducer = DefaultLocationReducer()

    async def provide_hover(
        self,
        document: Document,
        position: Position,
        cancel_event: asyncio.Event | None = None,
    ) -> list[str] | None:
        if not self.settings.enable_hover_provider:
            return None
        return await resolve_hover(
            document,
            position,
            searcher=self.searcher,
            reducer=self.reducer,
            settings=self.settings,
            cancel_event=cancel_event,
        )
