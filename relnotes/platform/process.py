"""Subprocess execution with Result-based error handling.

`run` wraps subprocess.run and returns structured errors instead of raising.
On top of it sit the two command executors the publish phase talks to:

- `SubprocessExecutor` echoes the command and runs it.
- `DryRunExecutor` echoes the command, records it, and runs nothing.

The executor is chosen once from the --dry-run flag, so call sites never
branch on dry-run themselves.

Usage:
    executor = DryRunExecutor(console) if dry_run else SubprocessExecutor(console)
    match executor.run(["git", "push", "origin", "refs/tags/app-v1.0"], cwd=root):
        case Ok(stdout):
            ...
        case Err(error):
            print(f"exit {error.returncode}")
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from relnotes.core.result import Err, Ok, Result
from relnotes.output.console import ConsoleProtocol

__all__ = [
    "CommandExecutor",
    "DryRunExecutor",
    "ProcessError",
    "SubprocessExecutor",
    "run",
]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 if the process could not start or timed out.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            list(command),
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        stdout = e.stdout if isinstance(e.stdout, str) else ""
        return Err(
            ProcessError(
                command=command,
                returncode=-1,
                stdout=stdout,
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=command, returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=command,
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


class CommandExecutor(Protocol):
    """Runs external commands on behalf of the publish phase."""

    @property
    def dry_run(self) -> bool: ...

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
        quiet: bool = False,
    ) -> Result[str, ProcessError]:
        """Run cmd in cwd.

        `quiet` suppresses the echo of read-only queries on the real executor.
        """
        ...


class SubprocessExecutor:
    """Executor that really runs commands."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    @property
    def dry_run(self) -> bool:
        return False

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
        quiet: bool = False,
    ) -> Result[str, ProcessError]:
        if not quiet:
            self._console.command(cmd)
        return run(cmd, cwd=cwd, timeout=timeout)


def _empty_calls() -> list[tuple[str, ...]]:
    return []


@dataclass
class DryRunExecutor:
    """Executor that reports commands without running them.

    Every command succeeds with empty output; `calls` keeps the command lines
    in order.
    """

    console: ConsoleProtocol
    calls: list[tuple[str, ...]] = field(default_factory=_empty_calls)

    @property
    def dry_run(self) -> bool:
        return True

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
        quiet: bool = False,
    ) -> Result[str, ProcessError]:
        del cwd, timeout, quiet
        self.calls.append(tuple(cmd))
        self.console.command(cmd, dry_run=True)
        return Ok("")
