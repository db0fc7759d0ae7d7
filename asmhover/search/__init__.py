"""Search package exports.

Combines project-file listing, multi-pattern grep, and location reduction in
one import surface.
"""

from __future__ import annotations

from .candidates import (
    DefaultLocationReducer,
    LocationReducer,
    ProjectSymbolSearcher,
    SymbolSearcher,
    find_candidate_locations,
)
from .files import collect_project_files
from .grep import RawMatch, grep_multiple
from .reduce import Location, reduce_locations

__all__ = [
    "DefaultLocationReducer",
    "Location",
    "LocationReducer",
    "ProjectSymbolSearcher",
    "RawMatch",
    "SymbolSearcher",
    "collect_project_files",
    "find_candidate_locations",
    "grep_multiple",
    "reduce_locations",
]
