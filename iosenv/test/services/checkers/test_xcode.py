# SPDX-License-Identifier: MIT
"""Tests for the Xcode inspector."""

from __future__ import annotations

import subprocess

import pytest

from iosenv.core.config import XcodeConfig
from iosenv.services.checkers.common import ToolProbe
from iosenv.services.checkers.xcode import Xcode, parse_xcode_version, version_info


class MockCommandRunner:
    """Mock command runner for testing."""

    def __init__(self, responses: dict[tuple[str, ...], tuple[int, str, str]] | None = None):
        self.responses = responses or {}
        self.calls: list[list[str]] = []

    def run(
        self, args: list[str], *, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append(args)
        key = tuple(args)
        if key in self.responses:
            rc, stdout, stderr = self.responses[key]
            return subprocess.CompletedProcess(args, rc, stdout, stderr)
        raise FileNotFoundError(f"Command not found: {args[0]}")

    async def run_async(
        self, args: list[str], *, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        return self.run(args, timeout=timeout)

    def which(self, name: str) -> str | None:
        return None


def _xcode(
    responses: dict[tuple[str, ...], tuple[int, str, str]],
    config: XcodeConfig | None = None,
) -> Xcode:
    return Xcode(probe=ToolProbe(runner=MockCommandRunner(responses)), config=config or XcodeConfig())


class TestParseXcodeVersion:
    """Tests for parse_xcode_version."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Xcode 8.3.3, Build version 8E3004b", (8, 3)),
            ("Xcode 9, Build version 9A235", (9, 0)),
            ("Xcode 10.0", (10, 0)),
        ],
    )
    def test_parses(self, text: str, expected: tuple[int, int]) -> None:
        assert parse_xcode_version(text) == expected

    def test_no_match(self) -> None:
        assert parse_xcode_version("Build version 8E3004b") is None


class TestVersionInfo:
    """Tests for version_info."""

    def test_truncates_at_first_comma(self) -> None:
        assert version_info("Xcode 8.3.3, Build version 8E3004b") == "Xcode 8.3.3"

    def test_no_comma(self) -> None:
        assert version_info("Xcode 8.3.3") == "Xcode 8.3.3"


class TestXcode:
    """Tests for Xcode inspector."""

    def test_select_path(self) -> None:
        xcode = _xcode({("/usr/bin/xcode-select", "--print-path"): (0, "/Applications/Xcode.app\n", "")})
        assert xcode.select_path() == "/Applications/Xcode.app"

    def test_select_path_empty_is_none(self) -> None:
        xcode = _xcode({("/usr/bin/xcode-select", "--print-path"): (0, "", "")})
        assert xcode.select_path() is None

    def test_select_path_failure_is_none(self) -> None:
        xcode = _xcode({("/usr/bin/xcode-select", "--print-path"): (2, "", "error")})
        assert xcode.select_path() is None

    def test_version_text_joins_lines(self) -> None:
        xcode = _xcode(
            {("/usr/bin/xcodebuild", "-version"): (0, "Xcode 8.3.3\nBuild version 8E3004b\n", "")}
        )
        assert xcode.version_text() == "Xcode 8.3.3, Build version 8E3004b"

    def test_version_text_without_xcode_banner(self) -> None:
        xcode = _xcode({("/usr/bin/xcodebuild", "-version"): (0, "something else\n", "")})
        assert xcode.version_text() is None

    def test_version_text_with_command_line_tools_only(self) -> None:
        xcode = _xcode({("/usr/bin/xcodebuild", "-version"): (1, "", "requires Xcode")})
        assert xcode.version_text() is None

    def test_eula_signed(self) -> None:
        xcode = _xcode({("/usr/bin/xcrun", "clang"): (1, "", "clang: error: no input files")})
        assert xcode.eula_signed is True

    def test_eula_not_signed(self) -> None:
        xcode = _xcode(
            {("/usr/bin/xcrun", "clang"): (69, "", "You have not agreed to the Xcode license agreements.")}
        )
        assert xcode.eula_signed is False

    def test_eula_unknown_when_xcrun_missing(self) -> None:
        assert _xcode({}).eula_signed is False

    @pytest.mark.parametrize(
        ("text", "ok"),
        [
            ("Xcode 7.0", True),
            ("Xcode 8.3.3, Build version 8E3004b", True),
            ("Xcode 6.4, Build version 6E35b", False),
            ("garbage", False),
        ],
    )
    def test_meets_version_check(self, text: str, ok: bool) -> None:
        assert _xcode({}).meets_version_check(text) is ok

    def test_meets_version_check_minor(self) -> None:
        xcode = _xcode({}, XcodeConfig(required_major=8, required_minor=2))
        assert xcode.meets_version_check("Xcode 8.1") is False
        assert xcode.meets_version_check("Xcode 8.2") is True
        assert xcode.meets_version_check("Xcode 9.0") is True
