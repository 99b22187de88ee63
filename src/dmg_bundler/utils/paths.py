"""Path and filesystem helper functions."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable


def ensure_directories(paths: Iterable[Path]) -> list[Path]:
    """Create all directories in the iterable if they do not exist."""

    created_or_existing: list[Path] = []
    for directory in paths:
        directory.mkdir(parents=True, exist_ok=True)
        created_or_existing.append(directory)
    return created_or_existing


def remove_tree(path: Path) -> bool:
    """Remove a directory tree if present and report whether anything was removed."""

    if not path.exists():
        return False
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
    return True


def write_resource_file(path: Path, content: str) -> Path:
    """Write UTF-8 text to path, creating parent directories as needed."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
