"""Tests for relnotes.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relnotes.core.config import Config, load_config, load_config_or_default
from relnotes.core.result import Err, Ok


class TestDefaults:
    def test_paths(self) -> None:
        config = Config()
        assert config.paths.manifest == "projects.json"
        assert config.paths.template == ".repo/release-template.md"
        assert config.paths.releases == ".repo/releases"

    def test_git_assets_tools(self) -> None:
        config = Config()
        assert config.git.remote == "origin"
        assert config.assets.extension == ".exe"
        assert config.tools.gh_paths == ()

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.git = None  # type: ignore[misc,assignment]


class TestFromDict:
    def test_empty_dict_gives_defaults(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_overrides(self) -> None:
        config = Config.from_dict(
            {
                "paths": {"manifest": "meta/projects.json", "template": "t.md"},
                "git": {"remote": "upstream"},
                "assets": {"extension": ".msi"},
                "tools": {"gh_paths": ["/opt/gh/bin/gh", "", 3]},
            }
        )
        assert config.paths.manifest == "meta/projects.json"
        assert config.paths.template == "t.md"
        assert config.paths.releases == ".repo/releases"
        assert config.git.remote == "upstream"
        assert config.assets.extension == ".msi"
        assert config.tools.gh_paths == ("/opt/gh/bin/gh",)

    def test_extension_gets_leading_dot(self) -> None:
        config = Config.from_dict({"assets": {"extension": "zip"}})
        assert config.assets.extension == ".zip"

    def test_wrong_types_fall_back(self) -> None:
        config = Config.from_dict({"paths": "nope", "git": {"remote": 5}})
        assert config == Config()


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "relnotes.toml"
        path.write_text('[git]\nremote = "upstream"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.git.remote == "upstream"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "relnotes.toml")

        assert isinstance(result, Err)
        assert result.error.kind == "not_found"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "relnotes.toml"
        path.write_text("[git\nremote=", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert result.error.kind == "io_error"
        assert "invalid TOML" in result.error.message


class TestLoadConfigOrDefault:
    def test_absent_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path) == Ok(Config())

    def test_present_file_is_loaded(self, tmp_path: Path) -> None:
        (tmp_path / "relnotes.toml").write_text('[assets]\nextension = ".msi"\n', encoding="utf-8")

        result = load_config_or_default(tmp_path)

        assert isinstance(result, Ok)
        assert result.value.assets.extension == ".msi"

    def test_broken_file_is_an_error(self, tmp_path: Path) -> None:
        (tmp_path / "relnotes.toml").write_text("= nope", encoding="utf-8")

        assert isinstance(load_config_or_default(tmp_path), Err)
