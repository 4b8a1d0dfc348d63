"""Error definitions for aggtool."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_IO = "E_IO"
E_FORMAT = "E_FORMAT"
E_SIZE = "E_SIZE"
E_DUP_NAME = "E_DUP_NAME"
E_FRAME_LIMIT = "E_FRAME_LIMIT"
E_DECODE = "E_DECODE"


@dataclass
class AggError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class ArchiveIOError(AggError):
    """File cannot be opened or read."""


class FormatViolationError(AggError):
    """Header, directory or container layout is inconsistent."""


class DecodeFailureError(AggError):
    """Source image cannot be decoded or converted to RGBA."""


def io_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> ArchiveIOError:
    return ArchiveIOError(code=E_IO, message=message, context=context)


def format_error(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> FormatViolationError:
    return FormatViolationError(code=code, message=message, context=context)


def decode_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> DecodeFailureError:
    return DecodeFailureError(code=E_DECODE, message=message, context=context)


__all__ = [
    "AggError",
    "ArchiveIOError",
    "FormatViolationError",
    "DecodeFailureError",
    "io_error",
    "format_error",
    "decode_error",
    "E_IO",
    "E_FORMAT",
    "E_SIZE",
    "E_DUP_NAME",
    "E_FRAME_LIMIT",
    "E_DECODE",
]
