"""
electroforge.fileops - Template Tree Copying
============================================

Small filesystem helpers used by the composer to lay template trees over the
output directory.
"""

from __future__ import annotations

import shutil
from pathlib import Path


def copy_tree(src: Path, dest: Path) -> list[Path]:
    """
    Recursively copy every file under ``src`` into ``dest``.

    Relative structure is preserved, intermediate directories are created,
    and files already present in ``dest`` are overwritten. Entries are
    visited in sorted order so repeated runs copy identically.

    Parameters
    ----------
    src : Path
        Template directory to copy from.

    dest : Path
        Destination root (usually the project directory).

    Returns
    -------
    list[Path]
        Destination paths of the files that were written.

    Raises
    ------
    FileNotFoundError
        If ``src`` does not exist.
    NotADirectoryError
        If ``src`` is not a directory.
    OSError
        On the first file that cannot be copied. Nothing is skipped
        silently.
    """
    if not src.exists():
        raise FileNotFoundError(f"Template directory does not exist: {src}")
    if not src.is_dir():
        raise NotADirectoryError(f"Template path is not a directory: {src}")

    written: list[Path] = []
    dest.mkdir(parents=True, exist_ok=True)

    for entry in sorted(src.iterdir()):
        target = dest / entry.name
        if entry.is_dir():
            written.extend(copy_tree(entry, target))
        else:
            shutil.copy2(entry, target)
            written.append(target)

    return written


def copy_file(src: Path, dest: Path) -> Path:
    """Copy a single file, creating the destination's parent directories."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)
    return dest


def is_empty_dir(path: Path) -> bool:
    return not any(path.iterdir())
