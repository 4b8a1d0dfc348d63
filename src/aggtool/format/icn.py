"""ICN sprite container packing and reading.

Layout::

    [frame_count u16][frame_region_size u32]
    frame*: [offset_x u16][offset_y u16][width u16][height u16]
            [animation_frames u8][pixel_data_offset u32]
            [AB CD EF][pixels width*height*4 RGBA]

``pixel_data_offset`` is relative to the start of the frame region, i.e.
the byte following the 6-byte container header.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .constants import (
    BYTES_PER_TEXEL,
    ICN_CONTAINER_HEADER_SIZE,
    ICN_FRAME_HEADER_SIZE,
    ICN_FRAME_MARKER,
    ICN_MAX_FRAMES,
)
from .cursor import ByteReader, ByteWriter
from .errors import E_FORMAT, E_FRAME_LIMIT, E_SIZE, format_error

__all__ = [
    "SpriteFrame",
    "pack_frame_header",
    "pack_container",
    "parse_container_header",
    "read_frames",
]


@dataclass(slots=True)
class SpriteFrame:
    width: int
    height: int
    pixels: bytes
    offset_x: int = 0
    offset_y: int = 0
    animation_frames: int = 0
    pixel_data_offset: int = 0

    @property
    def emitted_size(self) -> int:
        return ICN_FRAME_HEADER_SIZE + len(ICN_FRAME_MARKER) + len(self.pixels)


def pack_frame_header(frame: SpriteFrame) -> bytes:
    w = ByteWriter()
    w.u16(frame.offset_x)
    w.u16(frame.offset_y)
    w.u16(frame.width)
    w.u16(frame.height)
    w.u8(frame.animation_frames)
    w.u32(frame.pixel_data_offset)
    out = w.getvalue()
    if len(out) != ICN_FRAME_HEADER_SIZE:
        raise format_error(E_SIZE, f"Frame header size mismatch: {len(out)}")
    return out


def pack_container(frames: Sequence[SpriteFrame]) -> bytes:
    """Serialise ``frames`` in order, assigning each ``pixel_data_offset``."""
    if len(frames) > ICN_MAX_FRAMES:
        raise format_error(
            E_FRAME_LIMIT,
            f"Too many frames: {len(frames)}>{ICN_MAX_FRAMES}",
        )
    region = ByteWriter()
    for frame in frames:
        expected = frame.width * frame.height * BYTES_PER_TEXEL
        if len(frame.pixels) != expected:
            raise format_error(
                E_SIZE,
                "Pixel buffer does not match frame geometry",
                {
                    "width": frame.width,
                    "height": frame.height,
                    "pixels": len(frame.pixels),
                },
            )
        frame.pixel_data_offset = len(region) + ICN_FRAME_HEADER_SIZE
        region.raw(pack_frame_header(frame))
        region.raw(ICN_FRAME_MARKER)
        region.raw(frame.pixels)
    body = region.getvalue()
    header = ByteWriter()
    header.u16(len(frames))
    header.u32(len(body))
    return header.getvalue() + body


def parse_container_header(data: bytes) -> Tuple[int, int]:
    r = ByteReader(data)
    return r.u16(), r.u32()


def read_frames(data: bytes) -> List[SpriteFrame]:
    r = ByteReader(data)
    count = r.u16()
    region_size = r.u32()
    if region_size != r.remaining:
        raise format_error(
            E_SIZE,
            "Frame region size mismatch",
            {"declared": region_size, "actual": r.remaining},
        )
    frames: List[SpriteFrame] = []
    for i in range(count):
        start = r.position - ICN_CONTAINER_HEADER_SIZE
        offset_x = r.u16()
        offset_y = r.u16()
        width = r.u16()
        height = r.u16()
        animation_frames = r.u8()
        pixel_data_offset = r.u32()
        if pixel_data_offset != start + ICN_FRAME_HEADER_SIZE:
            raise format_error(
                E_FORMAT,
                f"Frame {i} offset does not match its position",
                {"stored": pixel_data_offset, "position": start},
            )
        if r.raw(len(ICN_FRAME_MARKER)) != ICN_FRAME_MARKER:
            raise format_error(E_FORMAT, f"Frame {i} marker missing")
        pixels = r.raw(width * height * BYTES_PER_TEXEL)
        frames.append(
            SpriteFrame(
                width=width,
                height=height,
                pixels=pixels,
                offset_x=offset_x,
                offset_y=offset_y,
                animation_frames=animation_frames,
                pixel_data_offset=pixel_data_offset,
            )
        )
    if r.remaining:
        raise format_error(E_SIZE, f"{r.remaining} trailing bytes after frames")
    return frames
