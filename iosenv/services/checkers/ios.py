# SPDX-License-Identifier: MIT
"""iOS toolchain workflow.

Validates what iOS device development needs on macOS:
- Xcode: installed, recent enough, license accepted
- Python: the ``six`` module used by lldb scripts
- Homebrew: ideviceinstaller, ios-deploy + libimobiledevice, CocoaPods

The three top-level checks are independent; checks inside the Homebrew
node are gated on Homebrew itself and on each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from iosenv.core.config import Config
from iosenv.core.versions import meets_minimum
from iosenv.platform.detection import Platform, detect_platform
from iosenv.services.checkers.base import Message, NodeResult, Outcome, ValidationResult
from iosenv.services.checkers.common import CommandRunner, DefaultCommandRunner, ToolProbe
from iosenv.services.checkers.xcode import Xcode, version_info

XCODE_DOWNLOAD_URL = "https://developer.apple.com/xcode/download/"
BREW_URL = "https://brew.sh/"


@dataclass(frozen=True, slots=True)
class IOSWorkflow:
    """Check that the iOS toolchain is usable.

    Attributes:
        xcode: Xcode inspector
        probe: Process boundary for every other tool
        config: Minimum versions and python module settings
        platform: Host platform, detected once at startup
    """

    xcode: Xcode
    probe: ToolProbe = field(default_factory=ToolProbe)
    config: Config = field(default_factory=Config)
    platform: Platform = field(default_factory=detect_platform)

    @classmethod
    def create(
        cls,
        config: Config,
        *,
        runner: CommandRunner | None = None,
        platform: Platform | None = None,
    ) -> IOSWorkflow:
        """Wire the workflow and its Xcode inspector to one shared probe."""
        probe = ToolProbe(
            runner=runner if runner is not None else DefaultCommandRunner(),
            timeout=config.probe.timeout,
        )
        return cls(
            xcode=Xcode(probe=probe, config=config.xcode),
            probe=probe,
            config=config,
            platform=platform if platform is not None else detect_platform(),
        )

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    @property
    def title(self) -> str:
        return "iOS toolchain - develop for iOS devices"

    @property
    def applies_to_host_platform(self) -> bool:
        return self.platform == Platform.MACOS

    @property
    def can_list_devices(self) -> bool:
        # simctl lists simulators; idevice_id lists real devices.
        return self.xcode.is_installed_and_meets_version_check

    @property
    def can_launch_devices(self) -> bool:
        return self.xcode.is_installed_and_meets_version_check

    # -------------------------------------------------------------------------
    # Tool probes (never cached)
    # -------------------------------------------------------------------------

    @property
    def has_idevice_id(self) -> bool:
        return self.probe.is_present(["idevice_id", "-h"])

    @property
    def has_idevice_installer(self) -> bool:
        return self.probe.is_present(["ideviceinstaller", "-h"])

    @property
    def has_ios_deploy(self) -> bool:
        return self.probe.is_present(["ios-deploy", "--version"])

    @property
    def ios_deploy_version_text(self) -> str:
        return self.probe.capture_output(["ios-deploy", "--version"]).replace("\n", "")

    @property
    def has_homebrew(self) -> bool:
        return self.probe.which("brew") is not None

    @property
    def has_python_module(self) -> bool:
        python = self.config.python
        return self.probe.is_present([python.interpreter, "-c", f"import {python.module}"])

    @property
    def has_cocoapods(self) -> bool:
        return self.probe.is_present(["pod", "--version"])

    @property
    def cocoapods_version_text(self) -> str:
        return self.probe.capture_output(["pod", "--version"])

    @property
    def ios_deploy_meets_version_check(self) -> bool:
        if not self.has_ios_deploy:
            return False
        return meets_minimum(self.ios_deploy_version_text, self.config.minimums.ios_deploy)

    @property
    def cocoapods_meets_version_check(self) -> bool:
        if not self.has_cocoapods:
            return False
        return meets_minimum(self.cocoapods_version_text, self.config.minimums.cocoapods)

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    async def validate(self) -> ValidationResult:
        """Run the Xcode, python and Homebrew checks, in that order."""
        xcode_node, xcode_info = self.check_xcode()
        python_node = self.check_python_module()
        brew_node = await self.check_brew()
        return ValidationResult.from_nodes(
            [xcode_node, python_node, brew_node],
            status_info=xcode_info,
        )

    def check_xcode(self) -> tuple[NodeResult, str | None]:
        """Check Xcode. Returns the node and the short version info, if installed."""
        select_path = self.xcode.select_path()
        version_text = self.xcode.version_text() if select_path else None

        if version_text is None:
            node = NodeResult(Outcome.MISSING)
            if not select_path:
                node.fail(
                    "Xcode not installed; this is necessary for iOS development.\n"
                    f"Download at {XCODE_DOWNLOAD_URL}.",
                    outcome=Outcome.MISSING,
                )
            else:
                node.fail(
                    "Xcode installation is incomplete; a full installation is necessary "
                    "for iOS development.\n"
                    f"Download at {XCODE_DOWNLOAD_URL}.\n"
                    "Once installed, run "
                    "'sudo xcode-select --switch /Applications/Xcode.app/Contents/Developer'.",
                    outcome=Outcome.MISSING,
                )
            return node, None

        node = NodeResult(Outcome.INSTALLED)
        node.info(f"Xcode at {select_path}")
        node.info(version_text)

        if not self.xcode.meets_version_check(version_text):
            node.fail(
                "iOS development requires a minimum Xcode version of "
                f"{self.config.xcode.required_text}.\n"
                "Download the latest version or update via the Mac App Store."
            )

        if not self.xcode.eula_signed:
            node.fail(
                "Xcode end user license agreement not signed; open Xcode or run the "
                "command 'sudo xcodebuild -license'."
            )

        return node, version_info(version_text)

    def check_python_module(self) -> NodeResult:
        """Check the python module needed by the debugger scripts."""
        if self.has_python_module:
            return NodeResult(Outcome.INSTALLED)

        module = self.config.python.module
        return NodeResult(
            Outcome.MISSING,
            [
                Message.error(
                    f'Python installation missing module "{module}".\n'
                    f"Install via 'pip install {module}' or 'sudo easy_install {module}'."
                )
            ],
        )

    async def check_brew(self) -> NodeResult:
        """Check Homebrew and the device tools installed through it."""
        if not self.has_homebrew:
            return NodeResult(
                Outcome.MISSING,
                [
                    Message.error(
                        "Brew not installed; use this to install tools for iOS device "
                        "development.\n"
                        f"Download brew at {BREW_URL}."
                    )
                ],
            )

        node = NodeResult(Outcome.INSTALLED)

        has_installer = self.has_idevice_installer
        if not has_installer:
            node.fail(
                "ideviceinstaller not available; this is used to discover connected "
                "iOS devices.\n"
                "To install, run:\n"
                "brew update\n"
                "brew install --HEAD libimobiledevice\n"
                "brew install ideviceinstaller"
            )

        has_ios_deploy = self.has_ios_deploy
        if has_ios_deploy:
            node.info(f"ios-deploy {self.ios_deploy_version_text}")

        if not self.has_idevice_id or not self.ios_deploy_meets_version_check:
            if has_ios_deploy:
                node.fail(
                    f"ios-deploy out of date ({self.config.minimums.ios_deploy} is required). "
                    "To upgrade:\n"
                    "brew update\n"
                    "brew upgrade ios-deploy"
                )
            else:
                node.fail(
                    "ios-deploy not installed. To install:\n"
                    "brew update\n"
                    "brew install ios-deploy"
                )
        elif has_installer and await self._libimobiledevice_incompatible():
            node.fail(
                "libimobiledevice is incompatible with the installed Xcode version. "
                "To update, run:\n"
                "brew update\n"
                "brew uninstall --ignore-dependencies libimobiledevice\n"
                "brew install --HEAD libimobiledevice"
            )

        if self.cocoapods_meets_version_check:
            node.info(f"CocoaPods version {self.cocoapods_version_text}")
        elif not self.has_cocoapods:
            node.fail(
                "CocoaPods not installed. To install:\n"
                "brew update\n"
                "brew install cocoapods\n"
                "pod setup"
            )
        else:
            node.fail(
                f"CocoaPods out of date ({self.config.minimums.cocoapods} is required). "
                "To upgrade:\n"
                "brew update\n"
                "brew upgrade cocoapods\n"
                "pod setup"
            )

        return node

    async def _libimobiledevice_incompatible(self) -> bool:
        """True when devices are listed but ideviceName cannot talk to them.

        Older libimobiledevice releases list devices yet fail every other
        call once a newer Xcode is installed.
        """
        result = await self.probe.run_async(["idevice_id", "-l"])
        if result is None or result.returncode != 0 or not result.stdout.strip():
            return False
        return not self.probe.is_present(["ideviceName"])
