"""Best-effort remote inspection from on-disk repository metadata.

Reads `.git/config` and the HEAD files directly instead of running git, so it
works identically in dry-run and never fails: anything it cannot determine is
reported as None (owner/name) or a fallback branch.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

__all__ = ["DEFAULT_BRANCH", "RemoteInfo", "inspect_remote", "parse_remote_url"]

DEFAULT_BRANCH = "main"

_SECTION_RE = re.compile(r'^\s*\[\s*remote\s+"(?P<name>[^"]+)"\s*\]')
_ANY_SECTION_RE = re.compile(r"^\s*\[")
_URL_RE = re.compile(r"^\s*url\s*=\s*(?P<url>\S+)\s*$", re.IGNORECASE)
# Matches the trailing "owner/name(.git)" of https, ssh:// and scp-like URLs.
_OWNER_NAME_RE = re.compile(r"[:/](?P<owner>[^/:]+)/(?P<name>[^/]+?)(?:\.git)?/*$")


@dataclass(frozen=True, slots=True)
class RemoteInfo:
    """What could be learned about the hosting remote.

    Attributes:
        owner: Account or organization owning the remote repository
        name: Remote repository name
        default_branch: Remote default branch (or a local fallback)
    """

    owner: str | None
    name: str | None
    default_branch: str = DEFAULT_BRANCH

    @property
    def is_complete(self) -> bool:
        return self.owner is not None and self.name is not None


def parse_remote_url(url: str) -> tuple[str, str] | None:
    """Extract (owner, name) from a remote URL.

    Examples:
        https://github.com/acme/tools.git -> ("acme", "tools")
        git@github.com:acme/tools.git     -> ("acme", "tools")
    """
    match = _OWNER_NAME_RE.search(url.strip())
    if match is None:
        return None
    return match.group("owner"), match.group("name")


def _git_dir(repo_root: Path) -> Path | None:
    dot_git = repo_root / ".git"
    if dot_git.is_dir():
        return dot_git
    if dot_git.is_file():
        # Worktrees and submodules: ".git" holds "gitdir: <path>".
        try:
            text = dot_git.read_text(encoding="utf-8").strip()
        except OSError:
            return None
        if text.startswith("gitdir:"):
            target = Path(text.removeprefix("gitdir:").strip())
            return target if target.is_absolute() else (repo_root / target).resolve()
    return None


def _common_dir(git_dir: Path) -> Path:
    commondir = git_dir / "commondir"
    if commondir.is_file():
        try:
            rel = commondir.read_text(encoding="utf-8").strip()
        except OSError:
            return git_dir
        target = Path(rel)
        return target if target.is_absolute() else (git_dir / target).resolve()
    return git_dir


def _remote_url(config_path: Path, remote: str) -> str | None:
    try:
        lines = config_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        return None

    in_remote = False
    for line in lines:
        section = _SECTION_RE.match(line)
        if section is not None:
            in_remote = section.group("name") == remote
            continue
        if _ANY_SECTION_RE.match(line):
            in_remote = False
            continue
        if in_remote:
            url = _URL_RE.match(line)
            if url is not None:
                return url.group("url")
    return None


def _read_symref(path: Path, prefix: str) -> str | None:
    try:
        text = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None
    ref = text.removeprefix("ref:").strip()
    if not text.startswith("ref:") or not ref.startswith(prefix):
        return None
    return ref.removeprefix(prefix) or None


def inspect_remote(repo_root: Path, remote: str = "origin") -> RemoteInfo:
    """Inspect the remote without running git.

    Default branch order: the remote HEAD symref, the local checked-out
    branch, then "main".
    """
    git_dir = _git_dir(repo_root)
    if git_dir is None:
        return RemoteInfo(owner=None, name=None)

    common = _common_dir(git_dir)
    owner: str | None = None
    name: str | None = None
    url = _remote_url(common / "config", remote)
    if url is not None:
        parsed = parse_remote_url(url)
        if parsed is not None:
            owner, name = parsed

    branch = _read_symref(common / "refs" / "remotes" / remote / "HEAD", f"refs/remotes/{remote}/")
    if branch is None:
        branch = _read_symref(git_dir / "HEAD", "refs/heads/")

    return RemoteInfo(owner=owner, name=name, default_branch=branch or DEFAULT_BRANCH)
