"""Reduction of raw definition hits to the locations shown for a request.

Policy:
  * hits on the same ``(path, line)`` collapse to one, keeping the leftmost column;
  * with ``remove_own_location`` the requesting line itself is dropped;
  * hits in the requesting document come first (by line), then the other
    files ordered by path and line.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ..document import Document, Position
from .grep import RawMatch


@dataclass(frozen=True)
class Location:
    path: Path
    line: int  # 0-based
    column: int  # 0-based


def reduce_locations(
    raw_matches: Iterable[RawMatch],
    document: Document,
    position: Position,
    remove_own_location: bool = False,
) -> list[Location]:
    own_path = document.path.resolve()
    leftmost: dict[tuple[Path, int], int] = {}
    for match in raw_matches:
        key = (match.path.resolve(), match.line)
        current = leftmost.get(key)
        if current is None or match.column < current:
            leftmost[key] = match.column

    locations: list[Location] = []
    for (path, line), column in leftmost.items():
        if remove_own_location and path == own_path and line == position.line:
            continue
        locations.append(Location(path=path, line=line, column=column))

    locations.sort(key=lambda loc: (loc.path != own_path, loc.path.as_posix(), loc.line))
    return locations
