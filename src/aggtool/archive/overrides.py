"""Loose-file overrides living next to an archive.

For ``data/HEROES2.AGG`` the override root is ``data/HEROES2``. Each
immediate subdirectory named ``<ASSET>.<TYPE>`` is handed to the encoder
registered for ``TYPE`` and, when that produces bytes, replaces the archive
entry named ``<ASSET>.<TYPE>`` (upper-cased).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from ..encoders import Encoder, default_encoders
from ..format.constants import ARCHIVE_EXTENSION
from ..logging import get_logger
from ..utils.paths import list_subdirectories, strip_suffix
from .index import normalize_name

__all__ = ["OverrideEntry", "OverrideStore", "override_root"]


@dataclass(frozen=True, slots=True)
class OverrideEntry:
    data: bytes
    external: bool = True


def override_root(
    archive_path: str | Path, archive_extension: str = ARCHIVE_EXTENSION
) -> Path:
    return strip_suffix(archive_path, archive_extension)


class OverrideStore:
    def __init__(
        self,
        encoders: Optional[Mapping[str, Encoder]] = None,
        logger: logging.Logger | None = None,
    ):
        self.logger = logger or get_logger("overrides")
        self._encoders: Dict[str, Encoder] = dict(
            encoders
            if encoders is not None
            else default_encoders(logger=self.logger)
        )
        self._entries: Dict[str, OverrideEntry] = {}

    def collect_externals(
        self,
        archive_path: str | Path,
        archive_extension: str = ARCHIVE_EXTENSION,
    ) -> bool:
        root = override_root(archive_path, archive_extension)
        if not root.is_dir():
            return False
        for child in list_subdirectories(root):
            name = child.name.upper()
            type_tag = name.rsplit(".", 1)[-1]
            encoder = self._encoders.get(type_tag)
            if encoder is None:
                self.logger.debug("No encoder for %s, skipped", child.name)
                continue
            blob = encoder(child)
            if blob:
                self.register(name, blob)
        return len(self._entries) != 0

    def register(self, name: str, data: bytes, external: bool = True) -> bool:
        """Add an override; the first registration of a name wins."""
        if name in self._entries:
            self.logger.debug("Override %s already registered", name)
            return False
        self._entries[name] = OverrideEntry(bytes(data), external)
        self.logger.debug("Registered override %s (%d bytes)", name, len(data))
        return True

    def get(self, name: str) -> Optional[OverrideEntry]:
        return self._entries.get(normalize_name(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> List[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
