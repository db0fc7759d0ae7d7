"""Candidate search seams.

``SymbolSearcher`` finds raw definition lines and ``LocationReducer`` narrows
them; the hover pipeline only talks to these two protocols.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from ..config import HoverSettings
from ..document import Document, Position
from ..patterns import LabelPattern
from .grep import RawMatch, grep_multiple
from .reduce import Location, reduce_locations

logger = logging.getLogger(__name__)


class SymbolSearcher(Protocol):
    async def search(self, patterns: Sequence[LabelPattern]) -> list[RawMatch]: ...


class LocationReducer(Protocol):
    async def reduce(
        self,
        raw_matches: Sequence[RawMatch],
        document: Document,
        position: Position,
        remove_own_location: bool,
    ) -> list[Location]: ...


class ProjectSymbolSearcher:
    """Searches every project file under ``root`` (ripgrep or Python scan)."""

    def __init__(self, root: Path, settings: HoverSettings | None = None) -> None:
        self.root = root.resolve()
        self.settings = settings or HoverSettings()

    async def search(self, patterns: Sequence[LabelPattern]) -> list[RawMatch]:
        return await asyncio.to_thread(
            grep_multiple,
            self.root,
            patterns,
            self.settings.file_globs,
            self.settings.show_hidden,
            self.settings.skip_gitignored,
            self.settings.max_matches,
        )


class DefaultLocationReducer:
    async def reduce(
        self,
        raw_matches: Sequence[RawMatch],
        document: Document,
        position: Position,
        remove_own_location: bool,
    ) -> list[Location]:
        return reduce_locations(raw_matches, document, position, remove_own_location)


async def find_candidate_locations(
    patterns: Sequence[LabelPattern],
    document: Document,
    position: Position,
    searcher: SymbolSearcher,
    reducer: LocationReducer,
) -> list[Location]:
    raw_matches = await searcher.search(patterns)
    if not raw_matches:
        return []
    locations = await reducer.reduce(raw_matches, document, position, False)
    logger.debug("%d raw hits reduced to %d locations", len(raw_matches), len(locations))
    return locations
