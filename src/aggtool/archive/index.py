"""AGG directory parsing.

File layout (all integers little-endian)::

    [count u16]
    [directory: count * (checksum u32, offset u32, size u32)]
    ... payload ...
    [name table: count * NAME_FIELD_WIDTH bytes, NUL padded]

The name table occupies the last ``count * name_width`` bytes of the file
and is index-aligned with the directory records.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..format.constants import (
    COUNT_FIELD_SIZE,
    NAME_FIELD_WIDTH,
    RECORD_SIZE,
)
from ..format.cursor import ByteReader
from ..format.errors import E_DUP_NAME, E_SIZE, format_error, io_error

__all__ = ["ArchiveRecord", "ArchiveIndex", "normalize_name"]


def normalize_name(name: str) -> str:
    """Cut ``name`` at its first NUL, matching how name slots are decoded."""
    return name.split("\x00", 1)[0]


@dataclass(frozen=True, slots=True)
class ArchiveRecord:
    offset: int
    size: int

    @property
    def end(self) -> int:
        return self.offset + self.size


def _check_name_width(name_width: int) -> None:
    if name_width <= 0:
        raise ValueError(f"name_width must be positive: {name_width}")


def _check_capacity(count: int, name_width: int, file_size: int) -> None:
    if count * (RECORD_SIZE + name_width) >= file_size:
        raise format_error(
            E_SIZE,
            "Header claims more entries than the file can hold",
            {"count": count, "file_size": file_size},
        )


class ArchiveIndex(Mapping[str, ArchiveRecord]):
    """Immutable name -> :class:`ArchiveRecord` mapping of one archive."""

    def __init__(
        self,
        records: Dict[str, ArchiveRecord],
        *,
        count: int,
        file_size: int,
        name_width: int = NAME_FIELD_WIDTH,
    ):
        self._records = dict(records)
        self._count = count
        self._file_size = file_size
        self._name_width = name_width

    @classmethod
    def load(
        cls, path: str | Path, name_width: int = NAME_FIELD_WIDTH
    ) -> "ArchiveIndex":
        """Read only the header, directory and name table of ``path``."""
        _check_name_width(name_width)
        p = Path(path)
        try:
            with p.open("rb") as f:
                file_size = f.seek(0, os.SEEK_END)
                f.seek(0)
                count = ByteReader(f.read(COUNT_FIELD_SIZE)).u16()
                _check_capacity(count, name_width, file_size)
                directory = f.read(count * RECORD_SIZE)
                f.seek(file_size - count * name_width)
                names = f.read(count * name_width)
        except OSError as e:
            raise io_error(
                f"Cannot read archive: {p}", {"errno": e.errno}
            ) from e
        return cls._from_tables(
            count,
            ByteReader(directory),
            ByteReader(names),
            file_size=file_size,
            name_width=name_width,
        )

    @classmethod
    def parse(
        cls, data: bytes, name_width: int = NAME_FIELD_WIDTH
    ) -> "ArchiveIndex":
        _check_name_width(name_width)
        stream = ByteReader(data)
        file_size = stream.size
        count = stream.u16()
        _check_capacity(count, name_width, file_size)
        directory = stream.view(count * RECORD_SIZE)
        stream.seek(file_size - count * name_width)
        names = stream.view(count * name_width)
        return cls._from_tables(
            count,
            directory,
            names,
            file_size=file_size,
            name_width=name_width,
        )

    @classmethod
    def _from_tables(
        cls,
        count: int,
        directory: ByteReader,
        names: ByteReader,
        *,
        file_size: int,
        name_width: int,
    ) -> "ArchiveIndex":
        records: Dict[str, ArchiveRecord] = {}
        for _ in range(count):
            name = names.string(name_width)
            directory.skip(4)  # legacy checksum, unused
            record = ArchiveRecord(directory.u32(), directory.u32())
            if record.end > file_size:
                raise format_error(
                    E_SIZE,
                    f"Entry {name} extends past the end of the file",
                    {
                        "offset": record.offset,
                        "size": record.size,
                        "file_size": file_size,
                    },
                )
            # first occurrence wins; later duplicates are dropped
            records.setdefault(name, record)
        if len(records) != count:
            raise format_error(
                E_DUP_NAME,
                "Name table contains duplicate entries",
                {"count": count, "distinct": len(records)},
            )
        return cls(
            records, count=count, file_size=file_size, name_width=name_width
        )

    @property
    def count(self) -> int:
        return self._count

    @property
    def file_size(self) -> int:
        return self._file_size

    @property
    def name_width(self) -> int:
        return self._name_width

    def __getitem__(self, name: str) -> ArchiveRecord:
        return self._records[normalize_name(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._records

    def get(  # type: ignore[override]
        self, name: str, default: Optional[ArchiveRecord] = None
    ) -> Optional[ArchiveRecord]:
        return self._records.get(normalize_name(name), default)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def names(self) -> List[str]:
        return list(self._records)

    def entries(self) -> List[Tuple[str, ArchiveRecord]]:
        """Entries in directory order."""
        return list(self._records.items())
