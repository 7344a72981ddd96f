from __future__ import annotations

import asyncio
from dataclasses import dataclass

from iosenv.core.config import Config
from iosenv.platform.detection import Platform
from iosenv.services.checkers import (
    CommandRunner,
    IOSWorkflow,
    Outcome,
    ValidationResult,
    Workflow,
)


@dataclass(frozen=True, slots=True)
class WorkflowReport:
    title: str
    result: ValidationResult


@dataclass(frozen=True, slots=True)
class DoctorReport:
    platform: Platform
    workflows: list[WorkflowReport]

    def all_installed(self) -> bool:
        return all(w.result.outcome == Outcome.INSTALLED for w in self.workflows)


class DoctorService:
    def __init__(
        self,
        *,
        config: Config,
        platform: Platform,
        runner: CommandRunner | None = None,
    ) -> None:
        self._config = config
        self._platform = platform
        self._runner = runner

    def workflows(self) -> list[Workflow]:
        """Workflows that apply to this host, in report order."""
        candidates: list[Workflow] = [
            IOSWorkflow.create(self._config, runner=self._runner, platform=self._platform),
        ]
        return [w for w in candidates if w.applies_to_host_platform]

    async def run_async(self) -> DoctorReport:
        reports: list[WorkflowReport] = []
        # One workflow at a time: probes are not meant to run concurrently.
        for workflow in self.workflows():
            reports.append(WorkflowReport(title=workflow.title, result=await workflow.validate()))
        return DoctorReport(platform=self._platform, workflows=reports)

    def run(self) -> DoctorReport:
        return asyncio.run(self.run_async())
