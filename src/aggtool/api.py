"""High-level API for aggtool.

Thin wrappers that wire an :class:`AggConfig` into the archive and encoder
classes and report progress through the active reporter.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from .archive import AggFile
from .archive.inspector import inspect_agg
from .config import AggConfig
from .encoders import IcnEncoder, default_encoders
from .format.errors import io_error
from .format.icn import read_frames
from .logging import get_logger
from .reporting import get_reporter, task

__all__ = [
    "ExtractResult",
    "open_archive",
    "read_asset",
    "extract_assets",
    "build_icn",
    "inspect_archive",
    "inspect_icn",
]


@dataclass(slots=True)
class ExtractResult:
    output_dir: Path
    files_written: int = 0
    bytes_written: int = 0


def open_archive(
    path: str | Path, config: Optional[AggConfig] = None
) -> AggFile:
    """Open ``path`` or raise the :class:`AggError` that made it fail."""
    cfg = config or AggConfig()
    logger = get_logger("agg")
    agg = AggFile(
        name_width=cfg.name_width,
        archive_extension=cfg.archive_extension,
        encoders=default_encoders(
            image_extensions=cfg.image_extensions,
            dump_path=cfg.dump_path,
            logger=logger,
        ),
        logger=logger,
    )
    if not agg.open(path):
        raise agg.error or io_error(f"Cannot open archive: {path}")
    return agg


def read_asset(
    path: str | Path, name: str, config: Optional[AggConfig] = None
) -> bytes:
    return open_archive(path, config).read(name)


def extract_assets(
    agg: AggFile,
    output_dir: str | Path,
    names: Optional[Iterable[str]] = None,
) -> ExtractResult:
    """Write each asset to ``output_dir/<name>``; empty assets are skipped."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    wanted = list(names) if names is not None else agg.names()
    result = ExtractResult(output_dir=out)
    rep = get_reporter()
    rep.start_task("extract", "Extract assets", total=len(wanted))
    for name in wanted:
        data = agg.read(name)
        if data:
            (out / Path(name).name).write_bytes(data)
            result.files_written += 1
            result.bytes_written += len(data)
        else:
            rep.verbose(f"skipped empty or missing asset {name}")
        rep.advance("extract", current_item=name)
    rep.end_task(
        "extract", entries=result.files_written, bytes=result.bytes_written
    )
    return result


def build_icn(
    source_dir: str | Path,
    output_path: str | Path,
    config: Optional[AggConfig] = None,
) -> int:
    """Encode ``source_dir`` into an ICN file; returns bytes written."""
    cfg = config or AggConfig()
    encoder = IcnEncoder(
        image_extensions=cfg.image_extensions, logger=get_logger("icn")
    )
    src = Path(source_dir)
    with task("icn.build", f"Encode {src.name}"):
        blob = encoder.build(src)
        if not blob:
            raise io_error(f"No images found in {src}", {"path": str(src)})
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(blob)
    return len(blob)


def inspect_archive(
    path: str | Path, config: Optional[AggConfig] = None
) -> dict[str, Any]:
    cfg = config or AggConfig()
    return inspect_agg(path, cfg.name_width)


def inspect_icn(path: str | Path) -> dict[str, Any]:
    data = Path(path).read_bytes()
    frames = read_frames(data)
    return {
        "path": str(path),
        "size": len(data),
        "frame_count": len(frames),
        "frames": [
            {
                "width": f.width,
                "height": f.height,
                "offset_x": f.offset_x,
                "offset_y": f.offset_y,
                "animation_frames": f.animation_frames,
                "pixel_data_offset": f.pixel_data_offset,
            }
            for f in frames
        ],
    }
