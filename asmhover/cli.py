"""Command-line front door for asmhover.

Resolves the hover for one cursor position in a source file and prints the
documentation comments of every definition found in the project.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import load_settings
from .document import Document, Position
from .hover import HoverProvider
from .render import DEFAULT_STYLE, render_hover


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show the documentation comments of the assembler label at a cursor position."
    )
    parser.add_argument("path", help="Source file containing the cursor.")
    parser.add_argument("line", type=_positive_int, help="Cursor line (1-based).")
    parser.add_argument("column", type=_positive_int, help="Cursor column (1-based).")
    parser.add_argument("--root", default=None, help="Project root to search. Defaults to current directory.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--verbose", action="store_true", help="Log search details to stderr.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, resolve the hover, and print it.

    Returns ``0`` when a hover was printed and ``1`` when there is nothing to
    show (including when the hover provider is disabled in the config).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"File not found: {path}")
    root = Path(args.root) if args.root is not None else Path.cwd()
    if not root.is_dir():
        raise SystemExit(f"Project root not found: {root}")

    document = Document.from_path(path)
    position = Position(line=args.line - 1, character=args.column - 1)
    provider = HoverProvider(root, load_settings())
    hover_texts = asyncio.run(provider.provide_hover(document, position))
    if hover_texts is None:
        return 1

    no_color = args.no_color or not sys.stdout.isatty()
    sys.stdout.write(render_hover(hover_texts, no_color=no_color, style=args.style))
    return 0


if __name__ == "__main__":
    sys.exit(main())
