"""Error values and exit codes.

Failures travel as `NotesError` values inside `Err` results. The CLI maps the
error kind to a stable process exit code with `exit_code_for`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

__all__ = ["ErrorCode", "ErrorKind", "NotesError", "exit_code_for"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (unknown project, missing version, bad ref, bad manifest)
    - 2: Environment error (git or gh not installed)
    - 3: Tool error (git or gh exited non-zero)
    - 5: I/O error (manifest/template missing, output not writable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    TOOL_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


ErrorKind = Literal[
    "not_found",
    "parse_error",
    "project_not_found",
    "missing_version",
    "tool_unavailable",
    "ref_resolution",
    "tool_execution",
    "io_error",
]


@dataclass(frozen=True, slots=True)
class NotesError:
    """Canonical error payload for generation and publishing.

    Attributes:
        kind: Error category, drives the exit code.
        message: One-line description.
        hint: Optional follow-up detail (path, stderr, suggestion).
        returncode: Exit code of the failed tool for `tool_execution` errors.
    """

    kind: ErrorKind
    message: str
    hint: str | None = None
    returncode: int | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


_EXIT_CODES: dict[ErrorKind, ErrorCode] = {
    "not_found": ErrorCode.IO_ERROR,
    "parse_error": ErrorCode.USER_ERROR,
    "project_not_found": ErrorCode.USER_ERROR,
    "missing_version": ErrorCode.USER_ERROR,
    "tool_unavailable": ErrorCode.ENV_ERROR,
    "ref_resolution": ErrorCode.USER_ERROR,
    "tool_execution": ErrorCode.TOOL_ERROR,
    "io_error": ErrorCode.IO_ERROR,
}


def exit_code_for(error: NotesError) -> ErrorCode:
    """Get the process exit code for an error."""
    return _EXIT_CODES.get(error.kind, ErrorCode.USER_ERROR)
