"""Helpers for managing output locations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sprite_splitter.archive import archive_name
from sprite_splitter.constants import FALLBACK_OUTPUT_DIR
from sprite_splitter.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable


def setup_output_directory(
    output_path: str,
    path_factory: Callable[[str], Path] = Path,
) -> Path:
    """
    Create the output directory if needed and return its path.

    Falls back to ``sprite_splitter_output`` when the requested directory
    cannot be created, so an export is not lost to a bad path.
    """
    resolved_path = path_factory(output_path)
    try:
        resolved_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        fallback_path = path_factory(FALLBACK_OUTPUT_DIR)
        logger.error("Failed to create output directory: %s", exc)
        fallback_path.mkdir(parents=True, exist_ok=True)
        logger.info("Using fallback directory: %s", fallback_path)
        return fallback_path
    return resolved_path


def archive_output_path(output_dir: Path, prefix: str) -> Path:
    """Return where the archive for ``prefix`` is written."""
    return output_dir / archive_name(prefix)
