"""Source documents, cursor positions, and file loading.

Mirrors the small slice of an editor document the hover lookup needs.
File reads use tolerant decoding so odd encodings never abort a request.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Position:
    line: int  # 0-based
    character: int  # 0-based


@dataclass(frozen=True)
class Document:
    """In-memory text of one source file."""

    path: Path
    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, path: Path, text: str) -> Document:
        return cls(path=path.resolve(), lines=tuple(split_lines(text)))

    @classmethod
    def from_path(cls, path: Path) -> Document:
        return cls.from_text(path, read_text(path))

    def line_at(self, line: int) -> str:
        if 0 <= line < len(self.lines):
            return self.lines[line]
        return ""


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics. Line endings are left as-is.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            with path.open(encoding=encoding, newline="") as handle:
                return handle.read()
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r``; numbering matches ripgrep."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


async def read_text_async(path: Path) -> str:
    """Deliver the full decoded text of ``path`` without blocking the event loop."""
    return await asyncio.to_thread(read_text, path)
