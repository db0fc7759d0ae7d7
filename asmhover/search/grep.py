"""Project-wide multi-pattern search for definition lines.

Runs all patterns in one ripgrep pass (PCRE2, for the bare-label lookahead)
and falls back to a Python ``re`` scan of the project files when ripgrep is
missing or rejects the patterns. Every hit is re-matched in Python so the
name column comes from the pattern's capture group.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..document import read_text, split_lines
from ..patterns import LabelPattern, first_name_column
from .files import collect_project_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawMatch:
    path: Path
    line: int  # 0-based
    column: int  # 0-based, start of the matched name
    text: str


class RipgrepUnavailable(Exception):
    """ripgrep cannot serve this search; the caller should scan in Python."""


def _strip_eol(text: str) -> str:
    return text.rstrip("\r\n")


def _grep_rg(
    root: Path,
    patterns: Sequence[LabelPattern],
    globs: Sequence[str],
    show_hidden: bool,
    skip_gitignored: bool,
    max_matches: int,
) -> list[RawMatch]:
    if shutil.which("rg") is None:
        raise RipgrepUnavailable("rg is not installed.")

    cmd = ["rg", "--json", "--line-number", "--pcre2"]
    if not skip_gitignored:
        cmd.append("--no-ignore")
    if show_hidden:
        cmd.append("--hidden")
    for pattern in globs:
        cmd.extend(["--iglob", pattern])
    for pattern in patterns:
        cmd.extend(["-e", pattern.source])
    cmd.append(".")

    try:
        proc = subprocess.Popen(
            cmd,
            cwd=root,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise RipgrepUnavailable(f"failed to run rg: {exc}") from exc

    matches: list[RawMatch] = []
    truncated = False
    stderr_text = ""
    try:
        assert proc.stdout is not None
        for raw in proc.stdout:
            line = raw.strip()
            if not line:
                continue
            try:
                payload = json.loads(line)
            except ValueError:
                continue
            if payload.get("type") != "match":
                continue
            data = payload.get("data", {})
            path_data = data.get("path", {})
            path_text = path_data.get("text") if isinstance(path_data, dict) else None
            if not path_text:
                continue
            relative_path = Path(path_text)
            if relative_path.is_absolute() or ".." in relative_path.parts:
                continue

            line_number = int(data.get("line_number") or 0)
            if line_number <= 0:
                continue
            lines_data = data.get("lines", {})
            line_text = _strip_eol(str(lines_data.get("text", ""))) if isinstance(lines_data, dict) else ""
            column = first_name_column(list(patterns), line_text)
            if column is None:
                # PCRE2 and Python disagree (e.g. unicode word chars); trust Python.
                continue
            matches.append(
                RawMatch(
                    path=(root / relative_path).resolve(),
                    line=line_number - 1,
                    column=column,
                    text=line_text,
                )
            )
            if len(matches) >= max_matches:
                truncated = True
                break
    finally:
        if truncated and proc.poll() is None:
            proc.kill()
        _stdout_unused, stderr_text = proc.communicate()

    if proc.returncode not in (0, 1) and not matches and not truncated:
        err = (stderr_text or "").strip() or f"rg failed with exit code {proc.returncode}"
        raise RipgrepUnavailable(err)
    return matches


def _grep_python(
    root: Path,
    patterns: Sequence[LabelPattern],
    globs: Sequence[str],
    show_hidden: bool,
    skip_gitignored: bool,
    max_matches: int,
) -> list[RawMatch]:
    matches: list[RawMatch] = []
    for path in collect_project_files(root, globs, show_hidden, skip_gitignored):
        try:
            text = read_text(path)
        except OSError as exc:
            logger.debug("skipping unreadable file %s: %s", path, exc)
            continue
        for line_idx, line_text in enumerate(split_lines(text)):
            column = first_name_column(list(patterns), line_text)
            if column is None:
                continue
            matches.append(RawMatch(path=path, line=line_idx, column=column, text=line_text))
            if len(matches) >= max_matches:
                return matches
    return matches


def grep_multiple(
    root: Path,
    patterns: Sequence[LabelPattern],
    globs: Sequence[str] = (),
    show_hidden: bool = False,
    skip_gitignored: bool = True,
    max_matches: int = 2_000,
) -> list[RawMatch]:
    """Return every project line matching any of ``patterns``.

    A line matching several patterns is reported once. The result is in no
    particular order; an empty list means nothing matched.
    """
    if not patterns:
        return []
    root = root.resolve()
    try:
        return _grep_rg(root, patterns, globs, show_hidden, skip_gitignored, max_matches)
    except RipgrepUnavailable as exc:
        logger.debug("falling back to python scan: %s", exc)
    return _grep_python(root, patterns, globs, show_hidden, skip_gitignored, max_matches)
