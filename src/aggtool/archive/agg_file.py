"""AGG archive facade: directory lookups with loose-file overrides."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional

from ..encoders import Encoder
from ..format.constants import ARCHIVE_EXTENSION, NAME_FIELD_WIDTH
from ..format.errors import AggError, io_error
from ..logging import get_logger
from .index import ArchiveIndex
from .overrides import OverrideStore

__all__ = ["AggFile"]


class AggFile:
    """One opened AGG archive.

    ``open`` parses the directory once and scans the override directory;
    ``read`` then serves each asset from an override when one was
    registered, and from the archive otherwise. The archive file is only
    held open for the duration of a single read.
    """

    def __init__(
        self,
        *,
        name_width: int = NAME_FIELD_WIDTH,
        archive_extension: str = ARCHIVE_EXTENSION,
        encoders: Optional[Mapping[str, Encoder]] = None,
        logger: logging.Logger | None = None,
    ):
        self.name_width = name_width
        self.archive_extension = archive_extension
        self.logger = logger or get_logger("agg")
        self._encoders = encoders
        self._path: Path | None = None
        self._index: ArchiveIndex | None = None
        self.error: AggError | None = None
        self._overrides = OverrideStore(encoders, logger=self.logger)

    def open(self, path: str | Path) -> bool:
        self._reset()
        p = Path(path)
        try:
            index = ArchiveIndex.load(p, self.name_width)
        except AggError as e:
            self.error = e
            self.logger.error("Cannot open %s: %s", p.name, e)
            return False
        try:
            self._overrides.collect_externals(p, self.archive_extension)
        except OSError as e:
            self._overrides.clear()
            self.error = io_error(f"Cannot scan overrides for {p.name}: {e}")
            self.logger.error("%s", self.error.message)
            return False
        self._index = index
        self._path = p
        self.logger.debug(
            "Opened %s: entries=%d overrides=%d",
            p.name,
            len(index),
            len(self._overrides),
        )
        return True

    def _reset(self) -> None:
        self._path = None
        self._index = None
        self.error = None
        self._overrides = OverrideStore(self._encoders, logger=self.logger)

    @property
    def is_open(self) -> bool:
        return self._index is not None

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def index(self) -> ArchiveIndex | None:
        return self._index

    @property
    def overrides(self) -> OverrideStore:
        return self._overrides

    def names(self) -> List[str]:
        return self._index.names() if self._index is not None else []

    def __contains__(self, name: object) -> bool:
        return self._index is not None and name in self._index

    def read(self, name: str) -> bytes:
        """Return a copy of asset ``name``; ``b""`` when absent or empty."""
        if self._index is None or self._path is None:
            return b""
        record = self._index.get(name)
        if record is None or record.size == 0:
            return b""
        external = self._overrides.get(name)
        if external is not None:
            self.logger.info("Using the external version of %s", name)
            return external.data
        try:
            with self._path.open("rb") as f:
                f.seek(record.offset)
                return f.read(record.size)
        except OSError as e:
            self.logger.error(
                "Cannot read %s from %s: %s", name, self._path.name, e
            )
            return b""
