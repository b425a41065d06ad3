"""Which operating system we run on, as far as tool lookup cares."""

from __future__ import annotations

import sys as _sys
from enum import Enum, auto
from functools import lru_cache

__all__ = ["Platform", "detect_platform"]


class Platform(Enum):
    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    def exe_name(self, tool: str) -> str:
        """File name of a command-line tool: "gh.exe" on Windows, "gh" elsewhere."""
        return f"{tool}.exe" if self is Platform.WINDOWS else tool


_PREFIXES: tuple[tuple[tuple[str, ...], Platform], ...] = (
    (("linux",), Platform.LINUX),
    (("darwin",), Platform.MACOS),
    (("win32", "cygwin", "msys"), Platform.WINDOWS),
)


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Map sys.platform to a Platform (cached)."""
    system = _sys.platform.lower()
    for prefixes, platform in _PREFIXES:
        if system.startswith(prefixes):
            return platform
    return Platform.UNKNOWN
