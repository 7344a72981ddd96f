# SPDX-License-Identifier: MIT
"""Application services for the iosenv CLI.

Services coordinate the domain layer (core/) with the checkers that talk
to the machine (services/checkers/).
"""

from iosenv.services.checkers import (
    IOSWorkflow,
    Message,
    Outcome,
    ValidationResult,
)
from iosenv.services.doctor import DoctorReport, DoctorService, WorkflowReport

__all__ = [
    # Result types
    "Message",
    "Outcome",
    "ValidationResult",
    # Workflows
    "IOSWorkflow",
    # Doctor
    "DoctorReport",
    "DoctorService",
    "WorkflowReport",
]
