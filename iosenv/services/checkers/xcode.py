# SPDX-License-Identifier: MIT
"""Xcode inspection.

Answers the questions the iOS workflow asks about Xcode: where it is
selected, which version it reports, whether the license was accepted and
whether that version is recent enough. Every answer re-runs the underlying
command.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from iosenv.core.config import XcodeConfig
from iosenv.services.checkers.common import ToolProbe

XCODE_SELECT = "/usr/bin/xcode-select"
XCODEBUILD = "/usr/bin/xcodebuild"
XCRUN = "/usr/bin/xcrun"

_XCODE_VERSION_RE = re.compile(r"Xcode ([0-9.]+)")


def parse_xcode_version(version_text: str) -> tuple[int, int] | None:
    """Extract (major, minor) from ``xcodebuild -version`` text.

    "Xcode 8.3.3, Build version 8E3004b" -> (8, 3); "Xcode 9" -> (9, 0).
    """
    match = _XCODE_VERSION_RE.search(version_text)
    if match is None:
        return None
    parts = [p for p in match.group(1).split(".") if p]
    if not parts:
        return None
    major = int(parts[0])
    minor = int(parts[1]) if len(parts) > 1 else 0
    return (major, minor)


def version_info(version_text: str) -> str:
    """Short version summary: the text before the first comma."""
    head, _, _ = version_text.partition(",")
    return head


@dataclass(frozen=True, slots=True)
class Xcode:
    """Xcode as seen through xcode-select, xcodebuild and xcrun.

    Attributes:
        probe: Process boundary
        config: Required Xcode version
    """

    probe: ToolProbe = field(default_factory=ToolProbe)
    config: XcodeConfig = field(default_factory=XcodeConfig)

    def select_path(self) -> str | None:
        """Developer directory chosen with xcode-select, None if unset."""
        args = [XCODE_SELECT, "--print-path"]
        if not self.probe.is_present(args):
            return None
        return self.probe.capture_output(args) or None

    def version_text(self) -> str | None:
        """``xcodebuild -version`` output on one line, None if not a full Xcode.

        xcodebuild fails when only the Command Line Tools are selected.
        """
        args = [XCODEBUILD, "-version"]
        if not self.probe.is_present(args):
            return None
        text = ", ".join(
            line.strip() for line in self.probe.capture_output(args).splitlines() if line.strip()
        )
        if _XCODE_VERSION_RE.search(text) is None:
            return None
        return text

    @property
    def eula_signed(self) -> bool:
        """False while running a developer tool asks to accept the license."""
        output = self.probe.combined_output([XCRUN, "clang"])
        if output is None:
            return False
        return "license" not in output

    def meets_version_check(self, version_text: str) -> bool:
        parsed = parse_xcode_version(version_text)
        if parsed is None:
            return False
        return parsed >= (self.config.required_major, self.config.required_minor)

    @property
    def is_installed_and_meets_version_check(self) -> bool:
        if not self.select_path():
            return False
        text = self.version_text()
        return text is not None and self.meets_version_check(text)
