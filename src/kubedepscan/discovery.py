"""File enumeration under a scan root."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from kubedepscan.observability.logging import get_logger


log = get_logger(__name__)


def find_files(
    root: str | Path,
    *,
    extensions: Iterable[str],
    excluded_dirs: Iterable[str],
) -> list[Path]:
    """Recursively list regular files under ``root`` with a matching suffix.

    Directories whose name is in ``excluded_dirs`` are pruned at any depth.
    Unreadable directories are skipped, and an unreadable root yields an
    empty list. Results are sorted by their path relative to ``root``.
    """
    root = Path(root)
    suffixes = {ext.lower() for ext in extensions}
    excluded = set(excluded_dirs)
    found: list[Path] = []

    def _on_error(error: OSError) -> None:
        log.debug("directory_walk_failed", path=error.filename, error=str(error))

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        for name in filenames:
            path = Path(dirpath) / name
            if path.suffix.lower() not in suffixes:
                continue
            if path.is_symlink() or not path.is_file():
                continue
            found.append(path)

    found.sort(key=lambda p: relative_path(p, root))
    log.debug("files_enumerated", root=str(root), count=len(found), extensions=sorted(suffixes))
    return found


def relative_path(path: Path, root: Path) -> str:
    """Render ``path`` relative to ``root`` in POSIX form."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


__all__ = ["find_files", "relative_path"]
