"""Release asset discovery and stable-name staging."""

from __future__ import annotations

import shutil
from pathlib import Path

from relnotes.core.errors import NotesError
from relnotes.core.result import Err, Ok, Result


def collect_assets(directory: Path, extension: str) -> Result[list[Path], NotesError]:
    """Files directly inside directory whose name ends with extension.

    The match is case-insensitive (`Setup.EXE` counts as `.exe`); results are
    sorted by name so uploads happen in a stable order. A missing directory
    has no assets; an unreadable one is an `io_error`.
    """
    if not directory.is_dir():
        return Ok([])
    suffix = extension.lower()
    try:
        found = [p for p in directory.iterdir() if p.is_file() and p.name.lower().endswith(suffix)]
    except OSError as e:
        return Err(
            NotesError(
                kind="io_error",
                message=f"failed to list assets: {e}",
                hint=str(directory),
            )
        )
    return Ok(sorted(found, key=lambda p: p.name))


def stable_asset_name(slug: str, asset: Path) -> str:
    """`sailor-events` + `SailorEvents-2.0.exe` -> `sailor-events.exe`."""
    return f"{slug}{asset.suffix}"


def stage_stable_copy(asset: Path, slug: str, staging_dir: Path) -> Result[Path, NotesError]:
    """Copy asset into staging_dir under its stable download name."""
    target = staging_dir / stable_asset_name(slug, asset)
    try:
        staging_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(asset, target)
    except OSError as e:
        return Err(
            NotesError(
                kind="io_error",
                message=f"failed to stage {asset.name} as {target.name}: {e}",
                hint=str(target),
            )
        )
    return Ok(target)
