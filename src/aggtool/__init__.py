"""aggtool: AGG asset archive reader with loose-file overrides."""

__version__ = "0.1.0"

from .archive import (
    AggFile,
    ArchiveIndex,
    ArchiveRecord,
    AssetLibrary,
    OverrideEntry,
    OverrideStore,
)
from .config import AggConfig, load_config
from .encoders import IcnEncoder
from .format.errors import (
    AggError,
    ArchiveIOError,
    DecodeFailureError,
    FormatViolationError,
)

__all__ = [
    "__version__",
    "AggFile",
    "ArchiveIndex",
    "ArchiveRecord",
    "AssetLibrary",
    "OverrideEntry",
    "OverrideStore",
    "AggConfig",
    "load_config",
    "IcnEncoder",
    "AggError",
    "ArchiveIOError",
    "DecodeFailureError",
    "FormatViolationError",
]
