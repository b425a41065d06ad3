"""Repository root detection and layout.

The repository root is the directory holding the shared manifest, the
`.repo/` tree (template, rendered notes, resources) and one sibling directory
per project with its built artifacts.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .config import Config
from .errors import NotesError
from .result import Err, Ok, Result

__all__ = ["RepoLayout", "detect_repo_root", "find_git_root_upward", "is_git_root"]

ENV_VAR = "RELNOTES_REPO_ROOT"


@dataclass(frozen=True, slots=True)
class RepoLayout:
    """Resolved paths inside the repository.

    Attributes:
        root: Repository root
        config: Settings used to resolve the configurable paths
    """

    root: Path
    config: Config = field(default_factory=Config)

    @property
    def manifest_path(self) -> Path:
        return self.root / self.config.paths.manifest

    @property
    def template_path(self) -> Path:
        return self.root / self.config.paths.template

    @property
    def releases_dir(self) -> Path:
        return self.root / self.config.paths.releases

    def default_output_path(self, slug: str, tag: str) -> Path:
        """`.repo/releases/{slug}/{tag}.md` under the root."""
        return self.releases_dir / slug / f"{tag}.md"

    def assets_dir(self, slug: str) -> Path:
        """Directory holding the built artifacts of one project."""
        return self.root / slug


def is_git_root(path: Path) -> bool:
    # `.git` is a file in worktrees and submodules.
    return (path / ".git").exists()


def find_git_root_upward(start: Path) -> Path | None:
    for parent in (start, *start.parents):
        if is_git_root(parent):
            return parent
    return None


def detect_repo_root(
    *,
    start_dir: Path | None = None,
    env_var: str = ENV_VAR,
) -> Result[Path, NotesError]:
    """Detect the repository root.

    Detection order:
    1. RELNOTES_REPO_ROOT environment variable (must be a directory)
    2. Nearest ancestor of start_dir (or cwd) containing `.git`
    3. start_dir (or cwd) itself
    """
    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir():
            return Ok(env_path)
        return Err(
            NotesError(
                kind="not_found",
                message=f"${env_var} is set to '{env_value}' but it is not a directory",
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    return Ok(find_git_root_upward(search_start) or search_start)
