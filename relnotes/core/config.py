"""Typed configuration loading.

Settings come from an optional `relnotes.toml` at the repository root. Every
value has a default, so a repository without the file behaves exactly like one
with an empty file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .errors import NotesError
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "AssetsConfig",
    "Config",
    "GitConfig",
    "PathsConfig",
    "ToolsConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relnotes.toml"

DEFAULT_MANIFEST = "projects.json"
DEFAULT_TEMPLATE = ".repo/release-template.md"
DEFAULT_RELEASES_DIR = ".repo/releases"
DEFAULT_REMOTE = "origin"
DEFAULT_ASSET_EXTENSION = ".exe"


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Repository-relative input/output locations."""

    manifest: str = DEFAULT_MANIFEST
    template: str = DEFAULT_TEMPLATE
    releases: str = DEFAULT_RELEASES_DIR


@dataclass(frozen=True, slots=True)
class GitConfig:
    remote: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class AssetsConfig:
    extension: str = DEFAULT_ASSET_EXTENSION


@dataclass(frozen=True, slots=True)
class ToolsConfig:
    """Extra install locations searched for `gh` after PATH."""

    gh_paths: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    git: GitConfig = field(default_factory=GitConfig)
    assets: AssetsConfig = field(default_factory=AssetsConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML."""
        paths: StrDict = get_table(data, "paths") or {}
        git: StrDict = get_table(data, "git") or {}
        assets: StrDict = get_table(data, "assets") or {}
        tools: StrDict = get_table(data, "tools") or {}

        extension = get_str(assets, "extension") or DEFAULT_ASSET_EXTENSION
        if not extension.startswith("."):
            extension = f".{extension}"

        return cls(
            paths=PathsConfig(
                manifest=get_str(paths, "manifest") or DEFAULT_MANIFEST,
                template=get_str(paths, "template") or DEFAULT_TEMPLATE,
                releases=get_str(paths, "releases") or DEFAULT_RELEASES_DIR,
            ),
            git=GitConfig(remote=get_str(git, "remote") or DEFAULT_REMOTE),
            assets=AssetsConfig(extension=extension),
            tools=ToolsConfig(gh_paths=tuple(get_str_list(tools, "gh_paths") or ())),
        )


def _parse_toml(path: Path) -> Result[StrDict, NotesError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(NotesError(kind="not_found", message=f"config file not found: {path}"))
    except PermissionError:
        return Err(NotesError(kind="io_error", message=f"permission denied reading: {path}"))
    except tomllib.TOMLDecodeError as e:
        return Err(NotesError(kind="io_error", message=f"invalid TOML syntax: {e}", hint=str(path)))
    except UnicodeDecodeError as e:
        return Err(NotesError(kind="io_error", message=f"error reading config: {e}", hint=str(path)))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(NotesError(kind="io_error", message="config root must be a TOML table"))
    return Ok(data)


def load_config(path: Path) -> Result[Config, NotesError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relnotes.toml

    Returns:
        Ok(Config) on success, Err(NotesError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Config.from_dict(result.value))


def load_config_or_default(repo_root: Path) -> Result[Config, NotesError]:
    """Load `relnotes.toml` from the repository root if present.

    A missing file yields the defaults; a broken file is still an error.
    """
    path = repo_root / CONFIG_FILENAME
    if not path.is_file():
        return Ok(Config())
    return load_config(path)
