"""Git operations module.

- Repository: tag creation, rev-parse and push through a command executor
- inspect_remote: owner/name/default branch read from `.git` metadata

Usage:
    from relnotes.git import Repository, inspect_remote

    info = inspect_remote(root)
    if info.is_complete:
        print(f"{info.owner}/{info.name}@{info.default_branch}")
"""

from relnotes.git.remote import DEFAULT_BRANCH, RemoteInfo, inspect_remote, parse_remote_url
from relnotes.git.repository import Repository, git_failure

__all__ = [
    "DEFAULT_BRANCH",
    "RemoteInfo",
    "Repository",
    "git_failure",
    "inspect_remote",
    "parse_remote_url",
]
