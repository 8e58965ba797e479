"""Grid overlay preview drawn on top of the source sheet."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from sprite_splitter.config_defaults import DEFAULT_LINE_WIDTH
from sprite_splitter.constants import COLOR_MODE_RGBA, FRAME_FORMAT
from sprite_splitter.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from sprite_splitter.grid_planner import GridPlan
    from sprite_splitter.image_io import SourceImage
    from sprite_splitter.type_defs import RGBA

DEFAULT_LINE_RGBA: RGBA = (255, 0, 0, 128)


def grid_lines(grid: GridPlan) -> tuple[list[int], list[int]]:
    """
    Return interior boundary positions as ``(xs, ys)``.

    No line is produced at 0 or at the far edge of the grid.
    """
    xs = [i * grid.frame_width for i in range(1, grid.cols)]
    ys = [i * grid.frame_height for i in range(1, grid.rows)]
    return xs, ys


def render_preview(
    source: SourceImage,
    grid: GridPlan,
    *,
    line_color: RGBA = DEFAULT_LINE_RGBA,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> Image.Image:
    """
    Draw the sheet at native size with the grid boundaries overlaid.

    Lines are drawn on a separate transparent layer and alpha-composited
    so a translucent colour blends with the sprite pixels underneath.
    The source bitmap is left untouched.
    """
    base = source.bitmap.convert(COLOR_MODE_RGBA)
    overlay = Image.new(COLOR_MODE_RGBA, base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)

    xs, ys = grid_lines(grid)
    bottom = base.height - 1
    right = base.width - 1
    for x in xs:
        draw.line([(x, 0), (x, bottom)], fill=line_color, width=line_width)
    for y in ys:
        draw.line([(0, y), (right, y)], fill=line_color, width=line_width)

    return Image.alpha_composite(base, overlay)


def save_preview(
    source: SourceImage,
    grid: GridPlan,
    out_path: Path,
    *,
    line_color: RGBA = DEFAULT_LINE_RGBA,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> Path:
    """Render the preview and save it to ``out_path`` as PNG."""
    if not isinstance(out_path, Path):
        msg = "out_path must be a pathlib.Path"
        raise TypeError(msg)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    img = render_preview(
        source,
        grid,
        line_color=line_color,
        line_width=line_width,
    )
    img.save(out_path, format=FRAME_FORMAT)
    logger.info("Preview saved to: %s", out_path)
    return out_path
