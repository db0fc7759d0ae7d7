from __future__ import annotations

import fnmatch
import logging
import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .gitignore import load_gitignore_matcher

logger = logging.getLogger(__name__)


def _matches_globs(name: str, globs: Sequence[str]) -> bool:
    if not globs:
        return True
    folded = name.casefold()
    return any(fnmatch.fnmatch(folded, pattern.casefold()) for pattern in globs)


def _collect_project_files_walk(
    root: Path,
    globs: Sequence[str],
    show_hidden: bool,
    skip_gitignored: bool,
) -> list[Path]:
    files: list[Path] = []
    ignore_matcher = load_gitignore_matcher(root) if skip_gitignored else None
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath).resolve()
        if not show_hidden:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            filenames = [name for name in filenames if not name.startswith(".")]
        if ignore_matcher is not None:
            dirnames[:] = [name for name in dirnames if not ignore_matcher.is_ignored(base / name)]
            filenames = [name for name in filenames if not ignore_matcher.is_ignored(base / name)]
        dirnames.sort(key=str.lower)
        filenames.sort(key=str.lower)
        for filename in filenames:
            if not _matches_globs(filename, globs):
                continue
            path = (base / filename).resolve()
            if path.is_file():
                files.append(path)
    return files


def _collect_project_files_rg(
    root: Path,
    globs: Sequence[str],
    show_hidden: bool,
    skip_gitignored: bool,
) -> list[Path] | None:
    if shutil.which("rg") is None:
        return None

    cmd = ["rg", "--files"]
    if not skip_gitignored:
        cmd.append("--no-ignore")
    if show_hidden:
        cmd.append("--hidden")
    for pattern in globs:
        cmd.extend(["--iglob", pattern])

    try:
        proc = subprocess.run(
            cmd,
            cwd=root,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("rg --files failed in %s: %s", root, exc)
        return None
    # Exit code 1 means "no files", anything else is a real failure.
    if proc.returncode not in (0, 1):
        logger.debug("rg --files exited with %s in %s", proc.returncode, root)
        return None

    files: list[Path] = []
    for raw in proc.stdout.splitlines():
        if not raw:
            continue
        path = (root / raw).resolve()
        try:
            relative_parts = path.relative_to(root).parts
        except ValueError:
            continue
        if not show_hidden and any(part.startswith(".") for part in relative_parts):
            continue
        if path.is_file():
            files.append(path)
    return files


def to_project_relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def collect_project_files(
    root: Path,
    globs: Sequence[str],
    show_hidden: bool = False,
    skip_gitignored: bool = True,
) -> list[Path]:
    """List source files under ``root`` matching ``globs``.

    Prefers ``rg --files`` and falls back to a directory walk. Both honour
    ``.gitignore`` when ``skip_gitignored`` is set; the walk asks git for it.
    """
    root = root.resolve()
    files = _collect_project_files_rg(root, globs, show_hidden, skip_gitignored)
    if files is None:
        files = _collect_project_files_walk(root, globs, show_hidden, skip_gitignored)
    return sorted(files, key=lambda p: to_project_relative(p, root).casefold())
