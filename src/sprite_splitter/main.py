"""Top-level orchestration: load, plan, preview, export, pack, write."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import sprite_splitter.runtime as ss_runtime
from sprite_splitter import archive, grid_planner, preview
from sprite_splitter.grid_planner import GridPlan, ValidationFailure
from sprite_splitter.logging_utils import logger
from sprite_splitter.session import SplitSession

if TYPE_CHECKING:  # pragma: no cover
    from sprite_splitter.config import SpriteSplitterConfig
    from sprite_splitter.exporter import ExportResult


@dataclass(slots=True)
class SplitReport:
    """What a run planned and which files it wrote."""

    plan: GridPlan | ValidationFailure
    archive_path: Path | None = None
    preview_path: Path | None = None
    result: ExportResult | None = None

    @property
    def exported(self) -> bool:
        return self.archive_path is not None


def build_session(config: SpriteSplitterConfig) -> SplitSession:
    """Create a session carrying the export settings from ``config``."""
    return SplitSession(
        on_encode_failure=config.export.on_encode_failure,
        compression=config.export.compression,
    )


def log_plan(grid: GridPlan | ValidationFailure) -> None:
    """Log the plan summary or every field error."""
    if isinstance(grid, ValidationFailure):
        for name, message in grid.errors.items():
            logger.error("Invalid %s: %s", name, message)
        return
    logger.info(
        "Grid: %d rows x %d cols of %dx%d frames (%d total)",
        grid.rows,
        grid.cols,
        grid.frame_width,
        grid.frame_height,
        grid.total_frames,
    )


def split_sheet(
    image_path: str,
    config: SpriteSplitterConfig,
    *,
    preview_path: Path | None = None,
    dry_run: bool = False,
) -> SplitReport:
    """
    Split one sprite sheet into a zip of frames.

    The preview, when requested, is written even if the grid is not an
    exact tiling. The archive is written only for a valid plan and when
    ``dry_run`` is false.
    """
    ss_runtime.validate_input_path(image_path)

    session = build_session(config)
    source = session.load_path(image_path)
    session.spec = config.split.to_spec()
    if config.naming.prefix is not None:
        session.prefix = config.naming.prefix
    ss_runtime.validate_prefix(session.prefix)

    current = grid_planner.plan(source.size, session.spec)
    log_plan(current)
    report = SplitReport(plan=current)

    if preview_path is not None:
        report.preview_path = preview.save_preview(
            source,
            session.layout(),
            Path(preview_path),
            line_color=config.preview.line_rgba,
            line_width=config.preview.line_width,
        )

    if isinstance(current, ValidationFailure) or dry_run:
        return report

    outcome = session.export(progress=config.export.progress)
    output_dir = ss_runtime.setup_output_directory(config.export.output)
    report.archive_path = archive.write_archive(
        outcome.archive_bytes, output_dir, session.prefix,
    )
    report.result = outcome.result
    logger.info(
        "Wrote %d frames to %s",
        len(outcome.result.frames),
        report.archive_path,
    )
    return report
