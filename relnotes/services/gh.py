from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from relnotes.core.errors import NotesError
from relnotes.core.result import Err, Found, NotFound, Ok, Probe, ProbeFailed, Result
from relnotes.platform.process import CommandExecutor, ProcessError
from relnotes.services.timeouts import GH_TIMEOUT_SECONDS, GH_UPLOAD_TIMEOUT_SECONDS

_NOT_FOUND_MARKERS = ("release not found", "not found", "http 404")


def _is_not_found(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    return error.returncode > 0 and any(marker in text for marker in _NOT_FOUND_MARKERS)


def gh_failure(error: ProcessError, *, message: str) -> NotesError:
    return NotesError(
        kind="tool_execution",
        message=f"{message} (exit {error.returncode})",
        hint=error.stderr.strip() or None,
        returncode=error.returncode,
    )


class GhClient:
    """Release operations through the GitHub CLI, run from the repository root."""

    def __init__(self, repo_root: Path, *, executor: CommandExecutor, gh: str = "gh") -> None:
        self.repo_root = repo_root
        self._executor = executor
        self._gh = gh

    def release_probe(self, tag: str) -> Probe[str, ProcessError]:
        result = self._run(
            ["release", "view", tag, "--json", "tagName", "--jq", ".tagName"], quiet=True
        )
        match result:
            case Ok(stdout):
                found = stdout.strip()
                return Found(found) if found else NotFound()
            case Err(e):
                if _is_not_found(e):
                    return NotFound()
                return ProbeFailed(e)

    def create_release(self, tag: str, *, title: str, notes_file: Path) -> Result[None, NotesError]:
        result = self._run(
            [
                "release",
                "create",
                tag,
                "--verify-tag",
                "--title",
                title,
                "--notes-file",
                str(notes_file),
            ]
        )
        if isinstance(result, Err):
            return Err(gh_failure(result.error, message=f"failed to create release {tag}"))
        return Ok(None)

    def edit_release(self, tag: str, *, title: str, notes_file: Path) -> Result[None, NotesError]:
        result = self._run(
            ["release", "edit", tag, "--title", title, "--notes-file", str(notes_file)]
        )
        if isinstance(result, Err):
            return Err(gh_failure(result.error, message=f"failed to edit release {tag}"))
        return Ok(None)

    def upload_assets(self, tag: str, files: Sequence[Path]) -> Result[None, NotesError]:
        """Upload files to the release, replacing assets with the same name."""
        result = self._run(
            ["release", "upload", tag, *(str(f) for f in files), "--clobber"],
            timeout=GH_UPLOAD_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(gh_failure(result.error, message=f"failed to upload assets to {tag}"))
        return Ok(None)

    def _run(
        self,
        args: list[str],
        *,
        quiet: bool = False,
        timeout: float = GH_TIMEOUT_SECONDS,
    ) -> Result[str, ProcessError]:
        return self._executor.run(
            [self._gh, *args], cwd=self.repo_root, timeout=timeout, quiet=quiet
        )
