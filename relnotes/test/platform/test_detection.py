"""Tests for relnotes.platform.detection module."""

from __future__ import annotations

import sys

from relnotes.platform.detection import Platform, detect_platform


class TestPlatform:
    def test_exe_name(self) -> None:
        assert Platform.WINDOWS.exe_name("gh") == "gh.exe"
        assert Platform.LINUX.exe_name("gh") == "gh"
        assert Platform.MACOS.exe_name("git") == "git"

    def test_str(self) -> None:
        assert str(Platform.MACOS) == "macos"


def test_detect_platform_matches_interpreter() -> None:
    expected = {
        "linux": Platform.LINUX,
        "darwin": Platform.MACOS,
        "win32": Platform.WINDOWS,
    }.get(sys.platform)
    if expected is not None:
        assert detect_platform() is expected
