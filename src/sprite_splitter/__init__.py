"""Public package exports for the sprite splitter."""

from __future__ import annotations

from .archive import archive_name, pack_frames, write_archive
from .errors import (
    DecodeFailure,
    EncodeFailure,
    ExportFailure,
    ExportInProgress,
    PackFailure,
    SpriteSplitterError,
    UnsupportedFileType,
)
from .exporter import ExportedFrame, ExportResult, export_frames
from .grid_planner import GridPlan, ValidationFailure, layout, plan
from .image_io import SourceImage, load_source_bytes, load_source_image
from .preview import render_preview
from .session import SplitSession
from .type_defs import ByCount, BySize, NamingConfig

__all__ = [
    "ByCount",
    "BySize",
    "DecodeFailure",
    "EncodeFailure",
    "ExportFailure",
    "ExportInProgress",
    "ExportResult",
    "ExportedFrame",
    "GridPlan",
    "NamingConfig",
    "PackFailure",
    "SourceImage",
    "SplitSession",
    "SpriteSplitterError",
    "UnsupportedFileType",
    "ValidationFailure",
    "archive_name",
    "export_frames",
    "layout",
    "load_source_bytes",
    "load_source_image",
    "pack_frames",
    "plan",
    "render_preview",
    "write_archive",
]
