"""Input validation helpers for runtime configuration."""

from __future__ import annotations

from pathlib import Path


def validate_input_path(image_path: str) -> None:
    """Ensure the sprite sheet path points to a file."""
    if not Path(image_path).is_file():
        msg = f"Sprite sheet not found: {image_path}"
        raise FileNotFoundError(msg)


def validate_prefix(prefix: str) -> None:
    """Reject prefixes that are empty or would escape the output directory."""
    if not prefix.strip():
        msg = "File name prefix must not be empty"
        raise ValueError(msg)
    if "/" in prefix or "\\" in prefix:
        msg = f"File name prefix must not contain path separators: {prefix!r}"
        raise ValueError(msg)
