"""Removal of template-only files and directories."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

LOGGER = logging.getLogger(__name__)


class CleanupError(RuntimeError):
    pass


def remove_path(path: Path) -> bool:
    """Remove a file, symlink or directory tree. Returns False when nothing was there."""
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def _contained_target(base: Path, rel: str) -> Path:
    """
    Resolve `rel` under `base` without following a final symlink, and refuse
    anything that lands on or outside `base`.
    """
    joined = base / rel
    if joined.name in ("", ".", ".."):
        raise CleanupError(f"Refusing to remove {rel!r}: not a path inside {base}")
    target = joined.parent.resolve() / joined.name
    if target == base or not target.is_relative_to(base):
        raise CleanupError(f"Refusing to remove {rel!r}: resolves outside {base}")
    return target


def remove_paths(root: str | Path, paths: Iterable[str]) -> list[str]:
    """
    Delete each of `paths` (relative to root) if present.

    Absent entries are skipped silently. Every entry is checked before anything
    is deleted. Returns the entries that were removed.
    """
    base = Path(root).resolve()
    targets = [(rel, _contained_target(base, rel)) for rel in paths]
    removed: list[str] = []
    for rel, target in targets:
        if remove_path(target):
            removed.append(rel)
            LOGGER.info("removed %s", rel)
    return removed
