# SPDX-License-Identifier: MIT
"""Common utilities for checkers.

This module provides the process boundary used by every check:
- CommandRunner protocol for subprocess abstraction
- ToolProbe, which turns command results into presence/version answers
"""

from __future__ import annotations

import asyncio
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from iosenv.output.console import ConsoleProtocol

__all__ = [
    "CommandRunner",
    "DefaultCommandRunner",
    "ProbeError",
    "ToolProbe",
    "TracingCommandRunner",
]


class CommandRunner(Protocol):
    """Protocol for running external commands.

    This abstraction allows mocking subprocess calls and PATH lookups in
    tests. Both run methods raise OSError when the binary cannot be spawned and
    subprocess.TimeoutExpired when the timeout elapses.
    """

    def run(
        self, args: list[str], *, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        """Run a command to completion, capturing stdout and stderr."""
        ...

    async def run_async(
        self, args: list[str], *, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        """Same as run(), without blocking the event loop."""
        ...

    def which(self, name: str) -> str | None:
        """Resolve an executable on PATH, None if absent."""
        ...


class DefaultCommandRunner:
    """Command runner backed by subprocess and asyncio."""

    def run(
        self, args: list[str], *, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )

    async def run_async(
        self, args: list[str], *, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout)
        except TimeoutError:
            raise subprocess.TimeoutExpired(args, timeout or 0) from None
        finally:
            # Reached on timeout and on cancellation.
            if proc.returncode is None:
                proc.kill()
                await proc.wait()

        return subprocess.CompletedProcess(
            args,
            proc.returncode if proc.returncode is not None else -1,
            stdout.decode(errors="replace"),
            stderr.decode(errors="replace"),
        )

    def which(self, name: str) -> str | None:
        return shutil.which(name)


@dataclass(frozen=True, slots=True)
class TracingCommandRunner:
    """Runner that echoes every command line before delegating (--verbose)."""

    inner: CommandRunner
    console: ConsoleProtocol

    def run(
        self, args: list[str], *, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        self._trace(args)
        return self.inner.run(args, timeout=timeout)

    async def run_async(
        self, args: list[str], *, timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        self._trace(args)
        return await self.inner.run_async(args, timeout=timeout)

    def which(self, name: str) -> str | None:
        self._trace(["which", name])
        return self.inner.which(name)

    def _trace(self, args: list[str]) -> None:
        from iosenv.output.console import Style

        self.console.print(f"$ {shlex.join(args)}", Style.DIM)


class ProbeError(RuntimeError):
    """A command expected to succeed could not be run or failed.

    capture_output() is only called after is_present() returned True for
    the same command, so this signals a broken caller, not a broken machine.
    """

    def __init__(self, args: list[str], reason: str) -> None:
        super().__init__(f"{shlex.join(args)}: {reason}")
        self.command = tuple(args)
        self.reason = reason


@dataclass(frozen=True, slots=True)
class ToolProbe:
    """Answers "is this tool here" and "what does it report".

    Nothing is cached: asking twice runs the command twice.

    Attributes:
        runner: Process boundary
        timeout: Per-command timeout in seconds (None = wait forever)
    """

    runner: CommandRunner = field(default_factory=DefaultCommandRunner)
    timeout: float | None = None

    def is_present(self, args: list[str]) -> bool:
        """Return True iff the command exits with code 0.

        A binary missing from PATH, a permission error, or a timeout all
        count as not present.
        """
        try:
            result = self.runner.run(args, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired):
            return False
        return result.returncode == 0

    def capture_output(self, args: list[str]) -> str:
        """Return the stripped stdout of a command known to succeed.

        Raises:
            ProbeError: If the command cannot be spawned or exits non-zero.
        """
        try:
            result = self.runner.run(args, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ProbeError(args, str(e)) from e
        if result.returncode != 0:
            raise ProbeError(args, f"exit {result.returncode}")
        return result.stdout.strip()

    def combined_output(self, args: list[str]) -> str | None:
        """Return stdout + stderr whatever the exit code, None if it cannot run."""
        try:
            result = self.runner.run(args, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired):
            return None
        return (result.stdout or "") + (result.stderr or "")

    async def run_async(self, args: list[str]) -> subprocess.CompletedProcess[str] | None:
        """Run a command without blocking; None if it cannot run."""
        try:
            return await self.runner.run_async(args, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired):
            return None

    def which(self, name: str) -> str | None:
        """Single PATH lookup through the runner."""
        return self.runner.which(name)
