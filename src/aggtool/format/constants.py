"""Binary layout constants for AGG archives and ICN sprite containers."""

from __future__ import annotations

# AGG container
NAME_FIELD_WIDTH = 15  # fixed-width, NUL-padded name slot
COUNT_FIELD_SIZE = 2
RECORD_SIZE = 12  # checksum(u32, ignored) + offset(u32) + size(u32)
ARCHIVE_EXTENSION = ".AGG"

# ICN sprite container
ICN_TYPE_TAG = "ICN"
ICN_CONTAINER_HEADER_SIZE = 6  # frame_count(u16) + frame_region_size(u32)
ICN_FRAME_HEADER_SIZE = 13
ICN_FRAME_MARKER = b"\xab\xcd\xef"
ICN_MAX_FRAMES = 0xFFFF
ICN_MAX_DIMENSION = 0xFFFF
BYTES_PER_TEXEL = 4  # RGBA8

IMAGE_EXTENSIONS = (".png",)

__all__ = [
    "NAME_FIELD_WIDTH",
    "COUNT_FIELD_SIZE",
    "RECORD_SIZE",
    "ARCHIVE_EXTENSION",
    "ICN_TYPE_TAG",
    "ICN_CONTAINER_HEADER_SIZE",
    "ICN_FRAME_HEADER_SIZE",
    "ICN_FRAME_MARKER",
    "ICN_MAX_FRAMES",
    "ICN_MAX_DIMENSION",
    "BYTES_PER_TEXEL",
    "IMAGE_EXTENSIONS",
]
