"""Image loading: MIME gating, decoding, and the SourceImage model."""
from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from sprite_splitter.constants import (
    COLOR_MODE_RGBA,
    SUPPORTED_MIME_TYPES,
    SUPPORTED_PIL_FORMATS,
)
from sprite_splitter.errors import DecodeFailure, UnsupportedFileType
from sprite_splitter.logging_utils import logger

# System mime.types files disagree on these two, so pin them
mimetypes.add_type("image/bmp", ".bmp")
mimetypes.add_type("image/webp", ".webp")


@dataclass(frozen=True)
class SourceImage:
    """
    Decoded sprite sheet and its metadata.

    Fields:
        width: Width in pixels.
        height: Height in pixels.
        bitmap: Fully decoded RGBA image.
        base_name: File name without its final extension.
    """

    width: int
    height: int
    bitmap: Image.Image
    base_name: str

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


def guess_mime_type(name: str) -> str | None:
    """Return the MIME type implied by a file name, if any."""
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type


def ensure_supported(name: str, mime_type: str | None = None) -> str:
    """
    Gate an upload on its MIME type.

    Uses ``mime_type`` when the caller knows it (e.g. from an upload
    header) and falls back to guessing from ``name``.

    Raises:
        UnsupportedFileType: If the type is not one of the accepted
            raster formats.

    """
    resolved = mime_type or guess_mime_type(name)
    if resolved not in SUPPORTED_MIME_TYPES:
        raise UnsupportedFileType(name, resolved)
    return resolved


def base_name_of(name: str) -> str:
    """Strip directories and the final extension from ``name``."""
    return Path(name).stem


def decode_image(data: bytes, name: str) -> Image.Image:
    """
    Decode raw bytes into an RGBA bitmap.

    The image is loaded eagerly so a truncated file fails here rather
    than later during cropping. Only PNG, JPEG, BMP and WEBP content is
    decoded, whatever the name claims, and oversized images are refused.

    Raises:
        DecodeFailure: If Pillow cannot identify or decode the data.

    """
    try:
        with Image.open(BytesIO(data), formats=SUPPORTED_PIL_FORMATS) as img:
            img.load()
            return img.convert(COLOR_MODE_RGBA)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        msg = f"Error decoding image '{name}': {e!s}"
        raise DecodeFailure(msg) from e


def load_source_bytes(
    data: bytes,
    name: str,
    mime_type: str | None = None,
) -> SourceImage:
    """
    Build a :class:`SourceImage` from uploaded bytes.

    Args:
        data: Raw file contents.
        name: Original file name, used for the MIME check and base name.
        mime_type: Optional explicit MIME type.

    Returns:
        The decoded source image.

    Raises:
        UnsupportedFileType: If the file type is not accepted.
        DecodeFailure: If the bytes are not a decodable image.

    """
    ensure_supported(name, mime_type)
    bitmap = decode_image(data, name)
    width, height = bitmap.size
    if width <= 0 or height <= 0:
        msg = f"Image '{name}' has no pixels"
        raise DecodeFailure(msg)

    source = SourceImage(
        width=width,
        height=height,
        bitmap=bitmap,
        base_name=base_name_of(name),
    )
    logger.info("Loaded %s (%dx%d)", name, width, height)
    return source


def load_source_image(path: str | Path) -> SourceImage:
    """
    Load a sprite sheet from disk.

    Raises:
        FileNotFoundError: If ``path`` does not point to a file.
        UnsupportedFileType: If the file type is not accepted.
        DecodeFailure: If the file cannot be decoded.

    """
    file_path = Path(path)
    if not file_path.is_file():
        msg = f"Image file not found: '{file_path}'"
        raise FileNotFoundError(msg)

    # Reject by name before reading anything
    ensure_supported(file_path.name)
    return load_source_bytes(file_path.read_bytes(), file_path.name)
