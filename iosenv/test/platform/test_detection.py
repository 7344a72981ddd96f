"""Tests for iosenv.platform.detection module."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import patch

import pytest

from iosenv.platform.detection import Platform, detect_platform


@pytest.fixture(autouse=True)
def _clear_cache() -> Iterator[None]:
    detect_platform.cache_clear()
    yield
    detect_platform.cache_clear()


class TestPlatformEnum:
    def test_str(self) -> None:
        assert str(Platform.MACOS) == "macos"
        assert str(Platform.LINUX) == "linux"


class TestDetectPlatform:
    @pytest.mark.parametrize(
        ("sys_platform", "expected"),
        [
            ("darwin", Platform.MACOS),
            ("linux", Platform.LINUX),
            ("win32", Platform.WINDOWS),
            ("cygwin", Platform.WINDOWS),
            ("freebsd13", Platform.UNKNOWN),
        ],
    )
    def test_detect(self, sys_platform: str, expected: Platform) -> None:
        with patch("iosenv.platform.detection._sys.platform", sys_platform):
            assert detect_platform() == expected

    def test_cached(self) -> None:
        with patch("iosenv.platform.detection._sys.platform", "darwin"):
            first = detect_platform()
        with patch("iosenv.platform.detection._sys.platform", "linux"):
            assert detect_platform() is first
