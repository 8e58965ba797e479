"""Tests for runtime.output helpers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import cast

import pytest

from sprite_splitter.runtime import output as runtime_output

# Concrete class (PosixPath/WindowsPath); Path itself is not subclassable on 3.11.
RealPath = type(Path())


def test_setup_output_directory_creates_path(tmp_path: Path) -> None:
    target = tmp_path / "new_dir" / "nested"
    result = runtime_output.setup_output_directory(str(target))
    assert result == target
    assert target.exists()


def test_setup_output_directory_fallback(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.chdir(tmp_path)

    class FailingPath(RealPath):
        def mkdir(  # type: ignore[override]
            self,
            mode: int = 0o777,
            parents: bool = False,  # noqa: FBT001, FBT002
            exist_ok: bool = False,  # noqa: FBT001, FBT002
        ) -> None:
            if "restricted" in str(self):
                raise PermissionError("Mock failure")
            return super().mkdir(mode=mode, parents=parents, exist_ok=exist_ok)

    result = runtime_output.setup_output_directory(
        "restricted",
        path_factory=cast(Callable[[str], Path], FailingPath),
    )
    assert result.name == "sprite_splitter_output"
    assert result.exists()
    assert "Failed to create output directory" in caplog.text


def test_archive_output_path(tmp_path: Path) -> None:
    assert runtime_output.archive_output_path(tmp_path, "hero") == (
        tmp_path / "hero.zip"
    )
