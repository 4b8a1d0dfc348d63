"""Configuration loading (JSON/YAML) for aggtool."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Tuple

import yaml

from .format.constants import (
    ARCHIVE_EXTENSION,
    IMAGE_EXTENSIONS,
    NAME_FIELD_WIDTH,
)

__all__ = ["AggConfig", "load_config"]


@dataclass(slots=True)
class AggConfig:
    name_width: int = NAME_FIELD_WIDTH
    archive_extension: str = ARCHIVE_EXTENSION
    image_extensions: Tuple[str, ...] = field(
        default_factory=lambda: IMAGE_EXTENSIONS
    )
    # directory receiving a copy of every encoded override blob
    dump_path: Path | None = None


def load_config(path: str | Path) -> AggConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        data: Any = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Root of configuration must be an object")
    return _parse_config_dict(data, base_dir=p.parent)


def _parse_config_dict(data: dict[str, Any], base_dir: Path) -> AggConfig:
    known = {f.name for f in fields(AggConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {unknown}")
    cfg = AggConfig()
    if "name_width" in data:
        cfg.name_width = int(data["name_width"])
        if cfg.name_width <= 0:
            raise ValueError("name_width must be positive")
    if "archive_extension" in data:
        cfg.archive_extension = str(data["archive_extension"])
    if "image_extensions" in data:
        exts = data["image_extensions"]
        if isinstance(exts, str) or not isinstance(exts, list):
            raise ValueError("image_extensions must be a list")
        cfg.image_extensions = tuple(
            e if e.startswith(".") else f".{e}" for e in map(str, exts)
        )
    if data.get("dump_path") is not None:
        cfg.dump_path = base_dir / str(data["dump_path"])
    return cfg
