"""Tests for relnotes.services.assets module."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from relnotes.core.result import Err, Ok
from relnotes.services.assets import collect_assets, stable_asset_name, stage_stable_copy


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestCollectAssets:
    def test_matches_extension_case_insensitively(self, tmp_path: Path) -> None:
        b = _touch(tmp_path / "b-setup.exe")
        a = _touch(tmp_path / "A-Setup.EXE")
        _touch(tmp_path / "readme.txt")
        _touch(tmp_path / "nested" / "c.exe")

        assert collect_assets(tmp_path, ".exe") == Ok([a, b])

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert collect_assets(tmp_path / "missing", ".exe") == Ok([])

    def test_other_extension(self, tmp_path: Path) -> None:
        msi = _touch(tmp_path / "app.msi")
        _touch(tmp_path / "app.exe")

        assert collect_assets(tmp_path, ".msi") == Ok([msi])

    def test_unreadable_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def denied(self: Path) -> None:
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "iterdir", denied)

        result = collect_assets(tmp_path, ".exe")

        assert isinstance(result, Err)
        assert result.error.kind == "io_error"
        assert result.error.hint == str(tmp_path)


class TestStableName:
    def test_version_free_name(self) -> None:
        asset = Path("SailorEvents-2.0.0.0.exe")
        assert stable_asset_name("sailor-events", asset) == "sailor-events.exe"

    def test_stage_copy(self, tmp_path: Path) -> None:
        asset = _touch(tmp_path / "build" / "SailorEvents-2.0.exe", "binary")

        staged = stage_stable_copy(asset, "sailor-events", tmp_path / "staging")

        assert staged == Ok(tmp_path / "staging" / "sailor-events.exe")
        assert (tmp_path / "staging" / "sailor-events.exe").read_text(encoding="utf-8") == "binary"
        assert asset.exists()

    def test_stage_copy_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def disk_full(src: object, dst: object) -> None:
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(shutil, "copy2", disk_full)
        asset = _touch(tmp_path / "build" / "SailorEvents-2.0.exe")

        result = stage_stable_copy(asset, "sailor-events", tmp_path / "staging")

        assert isinstance(result, Err)
        assert result.error.kind == "io_error"
        assert "No space left on device" in result.error.message
