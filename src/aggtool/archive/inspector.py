"""AGG inspection utilities.

Public functions:
- inspect_agg(path) -> dict
- validate_agg(info) -> list[str]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from ..format.constants import COUNT_FIELD_SIZE, NAME_FIELD_WIDTH, RECORD_SIZE
from .index import ArchiveIndex

__all__ = ["inspect_agg", "validate_agg"]


def inspect_agg(
    path: str | Path, name_width: int = NAME_FIELD_WIDTH
) -> Dict[str, Any]:
    index = ArchiveIndex.load(path, name_width)
    return {
        "path": str(path),
        "file_size": index.file_size,
        "name_width": index.name_width,
        "count": index.count,
        "entries": [
            {"name": name, "offset": rec.offset, "size": rec.size}
            for name, rec in index.entries()
        ],
    }


def validate_agg(info: Dict[str, Any]) -> List[str]:
    """Report non-empty entries whose bytes overlap the directory or names.

    Bounds against the file size are already enforced when the index is
    parsed; overlaps are legal for the reader and only reported here.
    """
    issues: List[str] = []
    payload_start = COUNT_FIELD_SIZE + info["count"] * RECORD_SIZE
    payload_end = info["file_size"] - info["count"] * info["name_width"]
    for e in info["entries"]:
        if e["size"] == 0:
            continue
        if e["offset"] < payload_start:
            issues.append(f"Entry {e['name']} overlaps the directory")
        if e["offset"] + e["size"] > payload_end:
            issues.append(f"Entry {e['name']} overlaps the name table")
    return issues
