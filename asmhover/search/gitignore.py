"""Gitignore filtering for the project walk used when ripgrep is missing.

Asks git once per search for the ignored paths under the project root.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Ignored files and directories of one project root, as resolved paths."""

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        resolved = path.resolve()
        if not _is_within(resolved, self.root):
            return False
        if resolved in self.ignored_files:
            return True
        current = resolved
        while True:
            if current in self.ignored_dirs:
                return True
            if current == self.root or current.parent == current:
                return False
            current = current.parent


def _git_output(args: list[str]) -> bytes | None:
    try:
        proc = subprocess.run(
            ["git", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("git %s failed: %s", " ".join(args), exc)
        return None
    return proc.stdout


def load_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Build a matcher for ``root``.

    Returns ``None`` when git is missing or ``root`` is not inside a work tree,
    in which case nothing is treated as ignored.
    """
    if shutil.which("git") is None:
        return None

    root = root.resolve()
    top_level = _git_output(["-C", str(root), "rev-parse", "--show-toplevel"])
    if top_level is None:
        return None
    top_text = top_level.decode("utf-8", errors="replace").strip()
    if not top_text:
        return None
    repo_root = Path(top_text).resolve()
    if not _is_within(root, repo_root):
        return None

    listing = _git_output(
        ["-C", str(repo_root), "ls-files", "-z", "--others", "-i", "--exclude-standard", "--directory"]
    )
    if listing is None:
        return None

    ignored_files: set[Path] = set()
    ignored_dirs: set[Path] = set()
    for raw in listing.split(b"\x00"):
        rel = raw.decode("utf-8", errors="replace")
        is_dir = rel.endswith("/")
        rel = rel.rstrip("/")
        if not rel:
            continue
        abs_path = (repo_root / rel).resolve()
        if not _is_within(abs_path, root):
            continue
        if is_dir or abs_path.is_dir():
            ignored_dirs.add(abs_path)
        else:
            ignored_files.add(abs_path)

    return GitIgnoreMatcher(
        root=root,
        ignored_files=frozenset(ignored_files),
        ignored_dirs=frozenset(ignored_dirs),
    )
