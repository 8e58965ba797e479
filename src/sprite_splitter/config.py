"""
Configuration schema and loader for the sprite splitter.

Defines Pydantic models for each config.toml section, a TOML loader,
and the helper that layers CLI arguments over a loaded file.
"""

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, field_validator

from sprite_splitter.config_defaults import (
    DEFAULT_COMPRESSION,
    DEFAULT_LINE_COLOR,
    DEFAULT_LINE_WIDTH,
    DEFAULT_ON_ENCODE_FAILURE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PROGRESS,
    DEFAULT_SPLIT_MODE,
)
from sprite_splitter.constants import HEX_RGB_LENGTH, HEX_RGBA_LENGTH
from sprite_splitter.type_defs import (
    RGBA,
    ByCount,
    BySize,
    CompressionName,
    EncodeFailurePolicy,
    SplitMode,
    SplitSpec,
)

_OPAQUE = 255


def parse_hex_color(text: str) -> RGBA:
    """Parse ``#rrggbb`` or ``#rrggbbaa`` strings into an RGBA tuple."""
    stripped = text.strip().lstrip("#")
    if len(stripped) not in (HEX_RGB_LENGTH, HEX_RGBA_LENGTH):
        msg = "color must look like #rrggbb or #rrggbbaa"
        raise ValueError(msg)
    try:
        channels = [
            int(stripped[i:i + 2], 16) for i in range(0, len(stripped), 2)
        ]
    except ValueError as exc:
        msg = "color contains invalid hex digits"
        raise ValueError(msg) from exc
    if len(channels) == HEX_RGB_LENGTH // 2:
        channels.append(_OPAQUE)
    red, green, blue, alpha = channels
    return red, green, blue, alpha


class SplitConfig(BaseModel):
    """Select the split mode and its two parameters."""

    mode: SplitMode = Field(DEFAULT_SPLIT_MODE)
    frame_width: int | None = Field(None, ge=1)
    frame_height: int | None = Field(None, ge=1)
    rows: int | None = Field(None, ge=1)
    cols: int | None = Field(None, ge=1)

    def to_spec(self) -> SplitSpec:
        """Return the split spec for the active mode."""
        if self.mode == "count":
            return ByCount(rows=self.rows, cols=self.cols)
        return BySize(frame_width=self.frame_width,
                      frame_height=self.frame_height)


class NamingSection(BaseModel):
    """Prefix for frame and archive names; None means the image's name."""

    prefix: str | None = None


class ExportConfig(BaseModel):
    """Control encode failure handling and archive output."""

    on_encode_failure: EncodeFailurePolicy = Field(DEFAULT_ON_ENCODE_FAILURE)
    compression: CompressionName = Field(DEFAULT_COMPRESSION)
    output: str = Field(DEFAULT_OUTPUT_DIR)
    progress: bool = DEFAULT_PROGRESS


class PreviewConfig(BaseModel):
    """Grid overlay appearance."""

    line_color: str = Field(DEFAULT_LINE_COLOR)
    line_width: int = Field(DEFAULT_LINE_WIDTH, ge=1)

    @field_validator("line_color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        parse_hex_color(value)
        return value

    @property
    def line_rgba(self) -> RGBA:
        return parse_hex_color(self.line_color)


class SpriteSplitterConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml.
    """

    split: SplitConfig = Field(
        default_factory=lambda: SplitConfig.model_validate({}),
    )
    naming: NamingSection = Field(
        default_factory=lambda: NamingSection.model_validate({}),
    )
    export: ExportConfig = Field(
        default_factory=lambda: ExportConfig.model_validate({}),
    )
    preview: PreviewConfig = Field(
        default_factory=lambda: PreviewConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> SpriteSplitterConfig:
        """Load and validate a sprite splitter config from a TOML file."""
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return SpriteSplitterConfig.model_validate(doc.unwrap())


# CLI argument name -> (section, field)
_CLI_FIELDS: dict[str, tuple[str, str]] = {
    "mode": ("split", "mode"),
    "frame_width": ("split", "frame_width"),
    "frame_height": ("split", "frame_height"),
    "rows": ("split", "rows"),
    "cols": ("split", "cols"),
    "prefix": ("naming", "prefix"),
    "output": ("export", "output"),
    "on_encode_failure": ("export", "on_encode_failure"),
    "compression": ("export", "compression"),
    "progress": ("export", "progress"),
    "line_color": ("preview", "line_color"),
    "line_width": ("preview", "line_width"),
}


def build_config_from_cli(
    args: dict[str, Any],
    base_config: SpriteSplitterConfig | None = None,
) -> SpriteSplitterConfig:
    """
    Merge CLI values over ``base_config`` (or the defaults).

    Only keys present in ``args`` with a non-None value override the
    base; the merged data is validated again as a whole.
    """
    base = base_config or SpriteSplitterConfig.model_validate({})
    data = base.model_dump()
    for key, (section, name) in _CLI_FIELDS.items():
        value = args.get(key)
        if value is not None:
            data[section][name] = value
    return SpriteSplitterConfig.model_validate(data)
