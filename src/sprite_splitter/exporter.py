"""
Frame export: crop every grid cell and encode it as a named PNG.

Cells are visited in row-major order, one at a time. The visiting order
is what assigns each frame its index, so it must not change. A cell
that fails to encode is either skipped or aborts the whole export,
depending on the configured policy.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from io import BytesIO
from typing import TYPE_CHECKING

from tqdm import tqdm

from sprite_splitter.config_defaults import DEFAULT_ON_ENCODE_FAILURE
from sprite_splitter.constants import (
    FRAME_FORMAT,
    FRAME_SUFFIX,
    PREFIX_SEPARATOR,
)
from sprite_splitter.errors import EncodeFailure, ExportFailure
from sprite_splitter.grid_planner import tiles_exactly
from sprite_splitter.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image

    from sprite_splitter.grid_planner import GridPlan
    from sprite_splitter.image_io import SourceImage
    from sprite_splitter.type_defs import (
        Box,
        EncodeFailurePolicy,
        NamingConfig,
    )


@dataclass(frozen=True, slots=True)
class ExportedFrame:
    """One encoded grid cell ready to be archived."""

    index: int
    row: int
    col: int
    file_name: str
    encoded_bytes: bytes


@dataclass(frozen=True, slots=True)
class FrameFailure:
    """A cell that was skipped because it could not be encoded."""

    index: int
    file_name: str
    reason: str


@dataclass(slots=True)
class ExportResult:
    """Ordered frames plus any cells skipped along the way."""

    frames: list[ExportedFrame] = field(default_factory=list)
    failures: list[FrameFailure] = field(default_factory=list)
    pad_length: int = 1

    @property
    def file_names(self) -> list[str]:
        return [frame.file_name for frame in self.frames]


def pad_length(total_frames: int) -> int:
    """Digits needed to print the largest index, never less than one."""
    return len(str(max(total_frames - 1, 0)))


def frame_file_name(prefix: str, index: int, width: int) -> str:
    """Return ``{prefix}_{index}.png`` with the index zero-padded."""
    return f"{prefix}{PREFIX_SEPARATOR}{index:0{width}d}{FRAME_SUFFIX}"


def iter_cells(grid: GridPlan) -> Iterator[tuple[int, int, int, Box]]:
    """Yield ``(index, row, col, box)`` for every cell in row-major order."""
    fw, fh = grid.frame_width, grid.frame_height
    for r in range(grid.rows):
        for c in range(grid.cols):
            left, top = c * fw, r * fh
            yield r * grid.cols + c, r, c, (left, top, left + fw, top + fh)


def crop_frame(bitmap: Image.Image, box: Box) -> Image.Image:
    """Copy ``box`` out of ``bitmap`` at 1:1 scale, keeping its mode."""
    return bitmap.crop(box)


def encode_png(frame: Image.Image) -> bytes:
    """Encode ``frame`` losslessly as PNG bytes."""
    buffer = BytesIO()
    frame.save(buffer, format=FRAME_FORMAT)
    return buffer.getvalue()


def _check_exportable(source: SourceImage, grid: GridPlan) -> None:
    if source is None or source.bitmap is None:
        msg = "No decoded image to export"
        raise ExportFailure(msg)
    if grid.is_empty:
        msg = "Grid has no rows or columns"
        raise ExportFailure(msg)
    if not tiles_exactly(source.size, grid):
        msg = (
            f"Grid {grid.cols}x{grid.rows} of "
            f"{grid.frame_width}x{grid.frame_height} frames does not tile "
            f"a {source.width}x{source.height} image exactly"
        )
        raise ExportFailure(msg)


def export_frames(
    source: SourceImage,
    grid: GridPlan,
    naming: NamingConfig,
    *,
    on_encode_failure: EncodeFailurePolicy = DEFAULT_ON_ENCODE_FAILURE,
    progress: bool = False,
) -> ExportResult:
    """
    Crop and encode every cell of ``grid``.

    Args:
        source: Decoded sprite sheet.
        grid: An exact tiling of ``source``.
        naming: Prefix for frame file names.
        on_encode_failure: ``"skip"`` records the failure and carries on
            with the next cell; ``"abort"`` raises on the first failure.
        progress: Show a tqdm progress bar over the cells.

    Returns:
        The frames in row-major order and any skipped cells.

    Raises:
        ExportFailure: If there is no image or the grid is not exact.
        EncodeFailure: On the first failed cell when the policy is
            ``"abort"``.

    """
    _check_exportable(source, grid)

    width = pad_length(grid.total_frames)
    result = ExportResult(pad_length=width)
    bitmap = source.bitmap

    with tqdm(
        total=grid.total_frames,
        desc="Exporting frames",
        disable=not progress,
    ) as bar:
        for index, row, col, box in iter_cells(grid):
            file_name = frame_file_name(naming.prefix, index, width)
            logger.debug("Cropping frame %d at %s", index, box)
            try:
                data = encode_png(crop_frame(bitmap, box))
            except (OSError, ValueError) as exc:
                if on_encode_failure == "abort":
                    raise EncodeFailure(index, file_name, str(exc)) from exc
                logger.warning(
                    "Skipping frame %d (%s): %s", index, file_name, exc,
                )
                result.failures.append(
                    FrameFailure(index=index, file_name=file_name,
                                 reason=str(exc)),
                )
            else:
                result.frames.append(
                    ExportedFrame(
                        index=index,
                        row=row,
                        col=col,
                        file_name=file_name,
                        encoded_bytes=data,
                    ),
                )
            bar.update(1)

    return result
