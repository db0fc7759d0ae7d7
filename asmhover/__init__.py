"""Public package surface for asmhover.

Exports the hover entry points and ``main`` for programmatic CLI invocation.
"""

from __future__ import annotations

from .document import Document, Position
from .hover import HOVER_SEPARATOR, HoverProvider, resolve_hover


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["Document", "HOVER_SEPARATOR", "HoverProvider", "Position", "main", "resolve_hover"]
