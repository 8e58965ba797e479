"""Tests for runtime.version helpers."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from pathlib import Path

import pytest

from sprite_splitter.runtime import version as runtime_version


@pytest.fixture
def not_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    def _missing(name: str) -> str:
        raise importlib_metadata.PackageNotFoundError(name)

    monkeypatch.setattr(
        runtime_version.importlib_metadata, "version", _missing,
    )


def test_installed_version_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        runtime_version.importlib_metadata,
        "version",
        lambda _name: "9.9.9",
    )
    assert runtime_version.resolve_project_version() == "9.9.9"


@pytest.mark.usefixtures("not_installed")
def test_falls_back_to_pyproject(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "sprite-splitter"\nversion = " 1.2.3 "\n',
        encoding="utf-8",
    )
    fake_module = tmp_path / "src" / "sprite_splitter" / "runtime" / "v.py"
    monkeypatch.setattr(runtime_version, "__file__", str(fake_module))
    assert runtime_version.resolve_project_version() == "1.2.3"


@pytest.mark.usefixtures("not_installed")
def test_pyproject_without_version(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "sprite-splitter"\n', encoding="utf-8",
    )
    monkeypatch.setattr(runtime_version, "__file__",
                        str(tmp_path / "pkg" / "v.py"))
    assert runtime_version.resolve_project_version() == "0.0.0"
