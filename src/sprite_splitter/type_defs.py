"""
Defines shared type aliases and small value types for the sprite splitter.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

SplitMode = Literal["size", "count"]
EncodeFailurePolicy = Literal["skip", "abort"]
CompressionName = Literal["deflated", "stored"]
RGBA = tuple[int, int, int, int]
Box = tuple[int, int, int, int]


@dataclass(frozen=True, slots=True)
class BySize:
    """Split by a fixed frame size in pixels."""

    frame_width: int | None
    frame_height: int | None


@dataclass(frozen=True, slots=True)
class ByCount:
    """Split by a row and column count."""

    rows: int | None
    cols: int | None


SplitSpec: TypeAlias = BySize | ByCount


@dataclass(frozen=True, slots=True)
class NamingConfig:
    """Prefix used for frame entries and the archive name."""

    prefix: str
