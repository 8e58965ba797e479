"""
Test configuration and shared fixtures for sprite_splitter.

This module defines reusable pytest fixtures for generating sprite
sheets in memory and on disk, building configs, and capturing logs.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable
from pathlib import Path
from typing import Any

import numpy as np
import pytest
from PIL import Image

from sprite_splitter.config import SpriteSplitterConfig
from sprite_splitter.image_io import SourceImage
from sprite_splitter.logging_utils import logger


def noisy_rgba(width: int, height: int, seed: int = 0) -> Image.Image:
    """Return an RGBA image with random pixels, alpha included."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def make_sheet() -> Callable[..., Image.Image]:
    """Factory for random RGBA sprite sheets of a given size."""

    def _make(width: int, height: int, seed: int = 0) -> Image.Image:
        return noisy_rgba(width, height, seed)

    return _make


@pytest.fixture
def make_source(
    make_sheet: Callable[..., Image.Image],
) -> Callable[..., SourceImage]:
    """Factory for SourceImage values backed by random sheets."""

    def _make(
        width: int,
        height: int,
        base_name: str = "sheet",
    ) -> SourceImage:
        return SourceImage(
            width=width,
            height=height,
            bitmap=make_sheet(width, height),
            base_name=base_name,
        )

    return _make


@pytest.fixture
def sheet_path(tmp_path: Path, make_sheet: Callable[..., Image.Image]) -> Path:
    """Save a 256x256 RGBA sheet as hero.png and return its path."""
    path = tmp_path / "hero.png"
    make_sheet(256, 256).save(path)
    return path


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., SpriteSplitterConfig]:
    """
    Build SpriteSplitterConfig instances with optional section overrides.

    Each config writes to an isolated output directory under tmp_path and
    disables the progress bar.
    """
    default_output = tmp_path / "out"

    def _build(
        *,
        split: dict[str, Any] | None = None,
        naming: dict[str, Any] | None = None,
        export: dict[str, Any] | None = None,
        preview: dict[str, Any] | None = None,
    ) -> SpriteSplitterConfig:
        data: dict[str, Any] = {
            "split": dict(split or {}),
            "naming": dict(naming or {}),
            "preview": dict(preview or {}),
        }
        effective_export = {"output": str(default_output), "progress": False}
        effective_export.update(export or {})
        data["export"] = effective_export
        return SpriteSplitterConfig.model_validate(data)

    return _build


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the shared logger so caplog can see it."""
    monkeypatch.setattr(logger, "propagate", True)
