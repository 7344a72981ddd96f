# SPDX-License-Identifier: MIT
"""Checker modules for toolchain validation.

- base: Outcome, Message, ValidationResult and the outcome merge rule
- common: CommandRunner and ToolProbe (process boundary)
- xcode: Xcode inspector
- ios: IOSWorkflow (Xcode -> python module -> Homebrew tools)
"""

from iosenv.services.checkers.base import (
    Message,
    NodeResult,
    Outcome,
    Severity,
    ValidationResult,
    Workflow,
    merge_outcomes,
    merge_pair,
)
from iosenv.services.checkers.common import (
    CommandRunner,
    DefaultCommandRunner,
    ProbeError,
    ToolProbe,
    TracingCommandRunner,
)
from iosenv.services.checkers.ios import IOSWorkflow
from iosenv.services.checkers.xcode import Xcode

__all__ = [
    # Result types
    "Message",
    "NodeResult",
    "Outcome",
    "Severity",
    "ValidationResult",
    "Workflow",
    "merge_outcomes",
    "merge_pair",
    # Process boundary
    "CommandRunner",
    "DefaultCommandRunner",
    "ProbeError",
    "ToolProbe",
    "TracingCommandRunner",
    # Workflows
    "IOSWorkflow",
    "Xcode",
]
