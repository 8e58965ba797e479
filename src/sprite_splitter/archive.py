"""Zip packaging for exported frames."""

from __future__ import annotations

import zipfile
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING

from sprite_splitter.config_defaults import DEFAULT_COMPRESSION
from sprite_splitter.constants import ARCHIVE_SUFFIX, PART_SUFFIX
from sprite_splitter.errors import PackFailure
from sprite_splitter.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from sprite_splitter.exporter import ExportedFrame
    from sprite_splitter.type_defs import CompressionName

_COMPRESSION_METHODS: dict[str, int] = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}


def archive_name(prefix: str) -> str:
    """Return the archive file name for ``prefix``."""
    return f"{prefix}{ARCHIVE_SUFFIX}"


def pack_frames(
    frames: Iterable[ExportedFrame],
    *,
    compression: CompressionName = DEFAULT_COMPRESSION,
) -> bytes:
    """
    Package frames into an in-memory zip, one entry per file name.

    When two frames share a name the later one's bytes win. Entries keep
    the order in which their names first appeared.

    Raises:
        PackFailure: If the archive cannot be serialized. Nothing partial
            is returned.

    """
    if compression not in _COMPRESSION_METHODS:
        msg = f"Unknown compression: {compression!r}"
        raise PackFailure(msg)

    entries: dict[str, bytes] = {}
    for frame in frames:
        if frame.file_name in entries:
            logger.warning(
                "Duplicate archive entry %s; keeping the later frame",
                frame.file_name,
            )
        entries[frame.file_name] = frame.encoded_bytes

    buffer = BytesIO()
    try:
        with zipfile.ZipFile(
            buffer, "w", compression=_COMPRESSION_METHODS[compression],
        ) as zf:
            for name, data in entries.items():
                zf.writestr(name, data)
    except (OSError, ValueError, zipfile.LargeZipFile) as exc:
        msg = f"Failed to build archive: {exc!s}"
        raise PackFailure(msg) from exc

    logger.debug("Packed %d entries (%s)", len(entries), compression)
    return buffer.getvalue()


def write_archive(data: bytes, output_dir: Path, prefix: str) -> Path:
    """
    Write archive ``data`` to ``output_dir / {prefix}.zip``.

    The bytes go to a sibling ``.part`` file first and are moved into
    place only once complete, so an existing archive is either replaced
    whole or left untouched.

    Raises:
        PackFailure: If the file cannot be written.

    """
    out_path = Path(output_dir) / archive_name(prefix)
    part_path = out_path.with_name(out_path.name + PART_SUFFIX)
    try:
        part_path.write_bytes(data)
        part_path.replace(out_path)
    except OSError as exc:
        part_path.unlink(missing_ok=True)
        msg = f"Failed to write archive {out_path}: {exc!s}"
        raise PackFailure(msg) from exc
    logger.info("Archive saved to: %s", out_path)
    return out_path
