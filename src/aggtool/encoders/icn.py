"""Rebuild an ICN sprite container from a directory of images.

Every image in the directory becomes one frame, in file-name order. Any
failure (undecodable image, oversized frame, too many frames) discards the
whole directory and yields an empty blob; callers treat that as "no
override".
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from PIL import Image, UnidentifiedImageError

from ..format.constants import (
    ICN_MAX_DIMENSION,
    ICN_MAX_FRAMES,
    IMAGE_EXTENSIONS,
)
from ..format.errors import (
    AggError,
    E_FRAME_LIMIT,
    E_SIZE,
    decode_error,
    format_error,
)
from ..format.icn import SpriteFrame, pack_container
from ..logging import get_logger
from ..utils.paths import list_files

__all__ = ["IcnEncoder", "load_frame"]


def load_frame(path: Path) -> SpriteFrame:
    """Decode ``path`` into an RGBA :class:`SpriteFrame`."""
    try:
        with Image.open(path) as img:
            width, height = img.size
            if width > ICN_MAX_DIMENSION or height > ICN_MAX_DIMENSION:
                raise format_error(
                    E_SIZE,
                    f"Image too large for an ICN frame: {width}x{height}",
                    {"path": str(path)},
                )
            with img.convert("RGBA") as rgba:
                pixels = rgba.tobytes("raw", "RGBA")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as e:
        raise decode_error(
            f"Cannot decode image: {path.name}", {"path": str(path)}
        ) from e
    return SpriteFrame(width=width, height=height, pixels=pixels)


class IcnEncoder:
    def __init__(
        self,
        image_extensions: Sequence[str] = IMAGE_EXTENSIONS,
        dump_path: Path | None = None,
        logger: logging.Logger | None = None,
    ):
        self.image_extensions = tuple(image_extensions)
        self.dump_path = Path(dump_path) if dump_path is not None else None
        self.logger = logger or get_logger("icn")

    def __call__(self, directory: Path) -> bytes:
        return self.encode(directory)

    def sources(self, directory: Path) -> List[Path]:
        return list_files(Path(directory), self.image_extensions)

    def build(self, directory: Path) -> bytes:
        """Like :meth:`encode` but raises :class:`AggError` on failure."""
        sources = self.sources(directory)
        if len(sources) > ICN_MAX_FRAMES:
            raise format_error(
                E_FRAME_LIMIT,
                f"{len(sources)} images exceed the ICN frame limit",
                {"directory": str(directory), "limit": ICN_MAX_FRAMES},
            )
        frames = [load_frame(p) for p in sources]
        if not frames:
            return b""
        return pack_container(frames)

    def encode(self, directory: Path) -> bytes:
        directory = Path(directory)
        try:
            blob = self.build(directory)
        except AggError as e:
            self.logger.warning("Skipping %s: %s", directory.name, e.message)
            return b""
        except OSError as e:
            self.logger.warning("Skipping %s: %s", directory.name, e)
            return b""
        if not blob:
            self.logger.debug("No images found in %s", directory)
            return b""
        self.logger.debug(
            "Encoded %s (%d bytes)", directory.name, len(blob)
        )
        if self.dump_path is not None:
            self._dump(directory.name, blob)
        return blob

    def _dump(self, name: str, blob: bytes) -> None:
        target = self.dump_path / f"{name}.bin"
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(blob)
        except OSError as e:
            self.logger.warning("Cannot write dump %s: %s", target, e)
            return
        self.logger.debug("Dumped %s", target)
