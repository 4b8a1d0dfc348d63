"""AGG archive reading and overrides."""

from .agg_file import AggFile
from .index import ArchiveIndex, ArchiveRecord
from .library import AssetLibrary
from .overrides import OverrideEntry, OverrideStore

__all__ = [
    "AggFile",
    "ArchiveIndex",
    "ArchiveRecord",
    "AssetLibrary",
    "OverrideEntry",
    "OverrideStore",
]
