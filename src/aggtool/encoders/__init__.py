"""Override encoders keyed by the type tag of an override directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Sequence

from ..format.constants import ICN_TYPE_TAG, IMAGE_EXTENSIONS
from .icn import IcnEncoder

__all__ = ["Encoder", "IcnEncoder", "default_encoders"]

Encoder = Callable[[Path], bytes]


def default_encoders(
    *,
    image_extensions: Sequence[str] = IMAGE_EXTENSIONS,
    dump_path: Path | None = None,
    logger: logging.Logger | None = None,
) -> Dict[str, Encoder]:
    return {
        ICN_TYPE_TAG: IcnEncoder(
            image_extensions=image_extensions,
            dump_path=dump_path,
            logger=logger,
        ),
    }
