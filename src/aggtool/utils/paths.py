"""Directory listing helpers.

Listings are sorted by file name so that everything derived from them
(override registration, ICN frame order) is deterministic across
platforms and filesystems.
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, List

__all__ = ["strip_suffix", "list_subdirectories", "list_files"]


def strip_suffix(path: str | Path, suffix: str) -> Path:
    """Remove ``suffix`` from the end of ``path`` (case-sensitive)."""
    text = str(path)
    if suffix and text.endswith(suffix):
        text = text[: -len(suffix)]
    return Path(text)


def list_subdirectories(directory: Path) -> List[Path]:
    return sorted(
        (p for p in directory.iterdir() if p.is_dir()), key=lambda p: p.name
    )


def list_files(directory: Path, extensions: Iterable[str]) -> List[Path]:
    wanted = {e.lower() for e in extensions}
    return sorted(
        (
            p
            for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in wanted
        ),
        key=lambda p: p.name,
    )
