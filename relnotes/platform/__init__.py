"""Platform layer: OS detection, processes and tool lookup."""

from .detection import Platform, detect_platform
from .process import CommandExecutor, DryRunExecutor, ProcessError, SubprocessExecutor, run
from .tools import find_tool, resolve_gh, resolve_git

__all__ = [
    "CommandExecutor",
    "DryRunExecutor",
    "Platform",
    "ProcessError",
    "SubprocessExecutor",
    "detect_platform",
    "find_tool",
    "resolve_gh",
    "resolve_git",
    "run",
]
