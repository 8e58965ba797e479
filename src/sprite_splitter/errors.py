"""
Exception types raised by the sprite splitter.

Each error also derives from the builtin it most resembles, so callers
that only know about ``ValueError`` or ``OSError`` still catch them.
Grid validation problems are not exceptions; see
:class:`sprite_splitter.grid_planner.ValidationFailure`.
"""

from __future__ import annotations


class SpriteSplitterError(Exception):
    """Base class for all sprite splitter failures."""


class UnsupportedFileType(SpriteSplitterError, ValueError):
    """Upload rejected before decoding because it is not a supported image."""

    def __init__(self, name: str, mime_type: str | None) -> None:
        self.name = name
        self.mime_type = mime_type
        kind = mime_type or "unknown type"
        super().__init__(f"{name} is not a supported image file ({kind})")


class DecodeFailure(SpriteSplitterError, OSError):
    """The uploaded bytes could not be decoded as an image."""


class EncodeFailure(SpriteSplitterError, OSError):
    """A single frame could not be encoded."""

    def __init__(self, index: int, file_name: str, reason: str) -> None:
        self.index = index
        self.file_name = file_name
        self.reason = reason
        super().__init__(
            f"Failed to encode frame {index} ({file_name}): {reason}")


class ExportFailure(SpriteSplitterError, ValueError):
    """Export was requested without a decoded image or a valid grid."""


class PackFailure(SpriteSplitterError, OSError):
    """The archive could not be serialized or written."""


class ExportInProgress(SpriteSplitterError, RuntimeError):
    """A second export was triggered while one is still running."""
