"""Priority-ordered lookup across several opened archives.

The game ships an expansion archive next to the base one; assets are
looked up in the expansion first and fall back to the base archive.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

from .agg_file import AggFile

__all__ = ["AssetLibrary"]


class AssetLibrary:
    def __init__(self, archives: Iterable[AggFile] = ()):
        self._archives: List[AggFile] = []
        for agg in archives:
            self.add(agg)

    def add(self, agg: AggFile) -> None:
        """Append ``agg`` with the lowest priority so far."""
        if not agg.is_open:
            raise ValueError("Archive must be opened before it is added")
        self._archives.append(agg)

    def __iter__(self) -> Iterator[AggFile]:
        return iter(self._archives)

    def __len__(self) -> int:
        return len(self._archives)

    def read(self, name: str) -> bytes:
        for agg in self._archives:
            data = agg.read(name)
            if data:
                return data
        return b""
