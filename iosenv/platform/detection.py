"""Host platform detection.

Workflows are only meaningful on some hosts (iOS development needs macOS).
Detection is cached since the answer cannot change within a run.
"""

from __future__ import annotations

import sys as _sys
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "detect_platform",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # sys.platform is cheap; platform.system() may query WMI on Windows.
    system = _sys.platform.lower()
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN
