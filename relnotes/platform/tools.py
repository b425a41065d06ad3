"""Locating the external command-line clients.

`git` must be on PATH. `gh` is looked up on PATH first and then in the places
its installers put it, since release machines often have it installed without
a PATH entry (notably Windows MSI installs).
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from relnotes.core.errors import NotesError
from relnotes.core.result import Err, Ok, Result

from .detection import Platform, detect_platform

__all__ = ["gh_install_locations", "find_tool", "resolve_gh", "resolve_git"]


def gh_install_locations(platform: Platform) -> list[Path]:
    """Known install locations of the GitHub CLI for a platform."""
    match platform:
        case Platform.WINDOWS:
            roots = [
                os.environ.get("ProgramFiles", r"C:\Program Files"),
                os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)"),
            ]
            local = os.environ.get("LOCALAPPDATA")
            exe = platform.exe_name("gh")
            out = [Path(r) / "GitHub CLI" / exe for r in roots]
            if local:
                out.append(Path(local) / "Programs" / "GitHub CLI" / exe)
            return out
        case Platform.MACOS:
            return [Path("/opt/homebrew/bin/gh"), Path("/usr/local/bin/gh")]
        case Platform.LINUX:
            return [
                Path("/usr/bin/gh"),
                Path("/usr/local/bin/gh"),
                Path("/home/linuxbrew/.linuxbrew/bin/gh"),
                Path("/snap/bin/gh"),
            ]
        case _:
            return []


def find_tool(name: str, candidates: Iterable[Path] = ()) -> Path | None:
    """Return the first usable executable: PATH lookup, then candidates."""
    found = shutil.which(name)
    if found is not None:
        return Path(found)
    for candidate in candidates:
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return candidate
    return None


def resolve_git() -> Result[Path, NotesError]:
    path = find_tool("git")
    if path is None:
        return Err(
            NotesError(
                kind="tool_unavailable",
                message="git: missing",
                hint="Install git: https://git-scm.com/downloads",
            )
        )
    return Ok(path)


def resolve_gh(extra_paths: Iterable[str] = ()) -> Result[Path, NotesError]:
    """Locate `gh`; configured extra paths are tried before the built-in ones."""
    candidates = [Path(p).expanduser() for p in extra_paths]
    candidates.extend(gh_install_locations(detect_platform()))
    path = find_tool("gh", candidates)
    if path is None:
        return Err(
            NotesError(
                kind="tool_unavailable",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(path)
