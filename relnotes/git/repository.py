"""Git repository abstraction for tagging.

All commands go through a `CommandExecutor`, so a dry-run repository prints
the exact git command lines and touches nothing.

Usage:
    repo = Repository(root, executor=SubprocessExecutor(console))

    match repo.tag_commit("app-v1.2.0"):
        case Found(sha):
            print(f"tag at {sha}")
        case NotFound():
            repo.create_tag("app-v1.2.0", commit)
        case ProbeFailed(error):
            print(f"git failed: {error.stderr}")
"""

from __future__ import annotations

from pathlib import Path

from relnotes.core.errors import NotesError
from relnotes.core.result import Err, Found, NotFound, Ok, Probe, ProbeFailed, Result
from relnotes.platform.process import CommandExecutor, ProcessError

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = ["Repository", "git_failure"]


def git_failure(error: ProcessError, *, message: str) -> NotesError:
    """Wrap a failed git invocation as a `tool_execution` error."""
    return NotesError(
        kind="tool_execution",
        message=f"{message} (exit {error.returncode})",
        hint=error.stderr.strip() or None,
        returncode=error.returncode,
    )


class Repository:
    """Tag operations on one local repository.

    Attributes:
        path: Repository root
        remote: Remote tags are pushed to
    """

    def __init__(
        self,
        path: Path,
        *,
        executor: CommandExecutor,
        remote: str = "origin",
        git: str = "git",
    ) -> None:
        self.path = path
        self.remote = remote
        self._executor = executor
        self._git = git

    def resolve_commit(self, ref: str) -> Result[str, NotesError]:
        """Resolve ref (branch, tag, sha, HEAD~1...) to a full commit sha."""
        result = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], quiet=True)
        match result:
            case Err(e):
                return Err(
                    NotesError(
                        kind="ref_resolution",
                        message=f"cannot resolve ref to a commit: {ref}",
                        hint=e.stderr.strip() or None,
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                # A dry-run executor produces no output; keep the symbolic ref.
                return Ok(stdout.strip() or ref)

    def tag_commit(self, tag: str) -> Probe[str, ProcessError]:
        """Probe the commit a local tag points at."""
        result = self._run(
            ["rev-parse", "--verify", "--quiet", f"refs/tags/{tag}^{{commit}}"], quiet=True
        )
        match result:
            case Ok(stdout):
                sha = stdout.strip()
                return Found(sha) if sha else NotFound()
            case Err(e):
                # --quiet: a missing ref exits 1 without a message.
                if e.returncode == 1 and not e.stderr.strip():
                    return NotFound()
                return ProbeFailed(e)

    def create_tag(self, tag: str, commit: str, *, force: bool = False) -> Result[None, NotesError]:
        """Create a lightweight tag at commit, replacing an existing one if force."""
        args = ["tag", "-f", tag, commit] if force else ["tag", tag, commit]
        result = self._run(args)
        if isinstance(result, Err):
            verb = "move" if force else "create"
            return Err(git_failure(result.error, message=f"failed to {verb} tag {tag}"))
        return Ok(None)

    def push_tag(self, tag: str, *, force: bool = False) -> Result[None, NotesError]:
        args = ["push"]
        if force:
            args.append("--force")
        args.extend([self.remote, f"refs/tags/{tag}"])
        result = self._run(args)
        if isinstance(result, Err):
            return Err(git_failure(result.error, message=f"failed to push tag {tag}"))
        return Ok(None)

    def _run(self, args: list[str], *, quiet: bool = False) -> Result[str, ProcessError]:
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if command in {"fetch", "push"} else _GIT_TIMEOUT_SECONDS
        )
        return self._executor.run(
            [self._git, "-C", str(self.path), *args],
            cwd=self.path,
            timeout=timeout,
            quiet=quiet,
        )
