"""Tests for DoctorService."""

from __future__ import annotations

import subprocess

from iosenv.core.config import Config
from iosenv.platform.detection import Platform
from iosenv.services.checkers.base import Outcome, ValidationResult
from iosenv.services.doctor import DoctorReport, DoctorService, WorkflowReport


class MockCommandRunner:
    """Mock command runner that knows every tool of a healthy Mac."""

    def __init__(
        self,
        responses: dict[tuple[str, ...], tuple[int, str, str]],
        paths: dict[str, str] | None = None,
    ):
        self.responses = responses
        self.paths = paths if paths is not None else {"brew": "/opt/homebrew/bin/brew"}
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
        return self.paths.get(name)


HEALTHY_MAC = {
    ("/usr/bin/xcode-select", "--print-path"): (0, "/Applications/Xcode.app/Contents/Developer\n", ""),
    ("/usr/bin/xcodebuild", "-version"): (0, "Xcode 9.2\nBuild version 9C40b\n", ""),
    ("/usr/bin/xcrun", "clang"): (1, "", "clang: error: no input files\n"),
    ("python", "-c", "import six"): (0, "", ""),
    ("ideviceinstaller", "-h"): (0, "", ""),
    ("idevice_id", "-h"): (0, "", ""),
    ("ios-deploy", "--version"): (0, "1.9.2\n", ""),
    ("idevice_id", "-l"): (0, "", ""),
    ("pod", "--version"): (0, "1.4.0\n", ""),
}


class TestDoctorService:
    def test_no_workflow_on_linux(self) -> None:
        runner = MockCommandRunner(HEALTHY_MAC)
        service = DoctorService(config=Config(), platform=Platform.LINUX, runner=runner)

        report = service.run()

        assert report.workflows == []
        assert report.all_installed() is True
        assert runner.calls == []

    def test_ios_workflow_on_macos(self) -> None:
        runner = MockCommandRunner(HEALTHY_MAC)
        service = DoctorService(config=Config(), platform=Platform.MACOS, runner=runner)

        report = service.run()

        assert len(report.workflows) == 1
        entry = report.workflows[0]
        assert entry.title.startswith("iOS toolchain")
        assert entry.result.outcome == Outcome.INSTALLED
        assert entry.result.status_info == "Xcode 9.2"
        assert report.all_installed() is True

    def test_config_is_applied(self) -> None:
        runner = MockCommandRunner(HEALTHY_MAC)
        config = Config.from_dict({"minimums": {"cocoapods": "1.5.0"}})
        service = DoctorService(config=config, platform=Platform.MACOS, runner=runner)

        report = service.run()

        assert report.workflows[0].result.outcome == Outcome.PARTIAL
        assert report.all_installed() is False


class TestDoctorReport:
    def test_all_installed_false_on_missing(self) -> None:
        report = DoctorReport(
            platform=Platform.MACOS,
            workflows=[WorkflowReport("iOS", ValidationResult(outcome=Outcome.MISSING))],
        )
        assert report.all_installed() is False
