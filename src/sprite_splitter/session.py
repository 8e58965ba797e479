"""
In-memory state for one splitting session.

Holds the loaded sheet, the current split parameters, and the naming
prefix. Every query recomputes from that state through the pure grid
planner, so a caller can react to each change by simply asking again.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from sprite_splitter import archive, exporter, grid_planner, image_io, preview
from sprite_splitter.config_defaults import (
    DEFAULT_COMPRESSION,
    DEFAULT_LINE_WIDTH,
    DEFAULT_ON_ENCODE_FAILURE,
    DEFAULT_SPLIT_MODE,
)
from sprite_splitter.errors import (
    DecodeFailure,
    ExportFailure,
    ExportInProgress,
)
from sprite_splitter.grid_planner import GridPlan, ValidationFailure
from sprite_splitter.logging_utils import logger
from sprite_splitter.type_defs import ByCount, BySize, NamingConfig, SplitSpec

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

    from PIL import Image

    from sprite_splitter.exporter import ExportResult
    from sprite_splitter.type_defs import (
        RGBA,
        CompressionName,
        EncodeFailurePolicy,
        SplitMode,
    )


@dataclass(frozen=True, slots=True)
class ExportOutcome:
    """Archive bytes and the export details they were built from."""

    archive_name: str
    archive_bytes: bytes
    result: ExportResult


@dataclass
class SplitSession:
    """
    Single-user session: one sheet, one split spec, one prefix.

    Both modes keep their own fields, so switching ``mode`` back and
    forth does not lose what was entered. Loading a new sheet clears all
    four fields and resets the prefix but keeps the mode. A failed
    decode leaves the session with no image; an unsupported file type
    leaves it unchanged.
    """

    mode: SplitMode = DEFAULT_SPLIT_MODE
    frame_width: int | None = None
    frame_height: int | None = None
    rows: int | None = None
    cols: int | None = None
    prefix: str = ""
    on_encode_failure: EncodeFailurePolicy = DEFAULT_ON_ENCODE_FAILURE
    compression: CompressionName = DEFAULT_COMPRESSION
    _image: image_io.SourceImage | None = field(
        default=None, init=False, repr=False,
    )
    _export_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False,
    )

    @property
    def image(self) -> image_io.SourceImage | None:
        return self._image

    @property
    def spec(self) -> SplitSpec:
        """Split spec for the active mode, built from the stored fields."""
        if self.mode == "count":
            return ByCount(self.rows, self.cols)
        return BySize(self.frame_width, self.frame_height)

    @spec.setter
    def spec(self, value: SplitSpec) -> None:
        if isinstance(value, BySize):
            self.mode = "size"
            self.frame_width = value.frame_width
            self.frame_height = value.frame_height
        elif isinstance(value, ByCount):
            self.mode = "count"
            self.rows = value.rows
            self.cols = value.cols
        else:
            msg = f"Unknown split spec: {value!r}"
            raise TypeError(msg)

    def _clear_fields(self) -> None:
        self.frame_width = None
        self.frame_height = None
        self.rows = None
        self.cols = None

    # ---- Loading ----
    def load_path(self, path: str | Path) -> image_io.SourceImage:
        """Load a sheet from disk, replacing any current one."""
        file_path = Path(path)
        image_io.ensure_supported(file_path.name)
        return self._replace_image(
            lambda: image_io.load_source_image(file_path),
        )

    def load_bytes(
        self,
        data: bytes,
        name: str,
        mime_type: str | None = None,
    ) -> image_io.SourceImage:
        """Load an uploaded sheet, replacing any current one."""
        image_io.ensure_supported(name, mime_type)
        return self._replace_image(
            lambda: image_io.load_source_bytes(data, name, mime_type),
        )

    def _replace_image(
        self,
        loader: Callable[[], image_io.SourceImage],
    ) -> image_io.SourceImage:
        try:
            source = loader()
        except DecodeFailure:
            self.remove()
            raise
        self._image = source
        self._clear_fields()
        self.prefix = source.base_name
        return source

    def remove(self) -> None:
        """Drop the current sheet and reset every parameter."""
        self._image = None
        self._clear_fields()
        self.prefix = ""

    # ---- Planning ----
    def plan(self) -> GridPlan | ValidationFailure | None:
        """Strict plan for the current state, or None with no image."""
        if self._image is None:
            return None
        return grid_planner.plan(self._image.size, self.spec)

    def layout(self) -> GridPlan:
        """Lenient grid used for the overlay and the frame-count hint."""
        if self._image is None:
            return grid_planner.EMPTY_PLAN
        return grid_planner.layout(self._image.size, self.spec)

    @property
    def frame_count_hint(self) -> int:
        return self.layout().total_frames

    @property
    def can_export(self) -> bool:
        return isinstance(self.plan(), GridPlan)

    def field_errors(self) -> dict[str, str]:
        current = self.plan()
        if isinstance(current, ValidationFailure):
            return dict(current.errors)
        return {}

    def render_preview(
        self,
        *,
        line_color: RGBA = preview.DEFAULT_LINE_RGBA,
        line_width: int = DEFAULT_LINE_WIDTH,
    ) -> Image.Image | None:
        if self._image is None:
            return None
        return preview.render_preview(
            self._image,
            self.layout(),
            line_color=line_color,
            line_width=line_width,
        )

    # ---- Export ----
    @property
    def export_pending(self) -> bool:
        return self._export_lock.locked()

    def export(self, *, progress: bool = False) -> ExportOutcome:
        """
        Export every frame and pack them into one archive.

        Works on a snapshot of the image, plan, and prefix taken before
        the first frame is cropped.

        Raises:
            ExportInProgress: If another export has not finished yet.
            ExportFailure: Without an image or with an inexact grid.
            EncodeFailure: Under the ``"abort"`` policy.
            PackFailure: If the archive cannot be built.

        """
        if not self._export_lock.acquire(blocking=False):
            msg = "An export is already running"
            raise ExportInProgress(msg)
        try:
            source = self._image
            if source is None:
                msg = "Load an image before exporting"
                raise ExportFailure(msg)
            current = grid_planner.plan(source.size, self.spec)
            if isinstance(current, ValidationFailure):
                details = "; ".join(current.errors.values())
                msg = f"Split parameters are invalid: {details}"
                raise ExportFailure(msg)
            naming = NamingConfig(prefix=self.prefix)

            result = exporter.export_frames(
                source,
                current,
                naming,
                on_encode_failure=self.on_encode_failure,
                progress=progress,
            )
            data = archive.pack_frames(
                result.frames, compression=self.compression,
            )
            if result.failures:
                logger.warning(
                    "%d of %d frames were skipped",
                    len(result.failures),
                    current.total_frames,
                )
            return ExportOutcome(
                archive_name=archive.archive_name(naming.prefix),
                archive_bytes=data,
                result=result,
            )
        finally:
            self._export_lock.release()
