# SPDX-License-Identifier: MIT
"""Base types for checkers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import reduce
from typing import Protocol


class Outcome(Enum):
    """Readiness of a toolchain component."""

    INSTALLED = auto()
    """Everything needed is present and up to date."""

    PARTIAL = auto()
    """Present but deficient (out of date, unlicensed, helper missing)."""

    MISSING = auto()
    """Not present at all."""

    def __str__(self) -> str:
        return self.name.lower()


class Severity(Enum):
    """Severity of a validation message."""

    INFO = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class Message:
    """One line of diagnosis, possibly spanning several text lines.

    Attributes:
        text: Human-readable text (remediation steps separated by newlines)
        severity: INFO for facts about the install, ERROR for something to fix
    """

    text: str
    severity: Severity = Severity.INFO

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @classmethod
    def info(cls, text: str) -> Message:
        return cls(text=text, severity=Severity.INFO)

    @classmethod
    def error(cls, text: str) -> Message:
        return cls(text=text, severity=Severity.ERROR)


def _empty_messages() -> list[Message]:
    return []


@dataclass(slots=True)
class NodeResult:
    """Outcome and messages accumulated by one top-level check.

    A check starts from an outcome and downgrades it as sub-checks fail.
    Messages keep the order in which they were added.
    """

    outcome: Outcome
    messages: list[Message] = field(default_factory=_empty_messages)

    def info(self, text: str) -> None:
        self.messages.append(Message.info(text))

    def fail(self, text: str, *, outcome: Outcome = Outcome.PARTIAL) -> None:
        """Record an error and downgrade the outcome."""
        self.outcome = outcome
        self.messages.append(Message.error(text))


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Final diagnosis of one workflow.

    Attributes:
        outcome: Merged outcome of every top-level check
        messages: All messages, in check order
        status_info: Short summary shown next to the workflow name (e.g. Xcode version)
    """

    outcome: Outcome
    messages: tuple[Message, ...] = ()
    status_info: str | None = None

    @classmethod
    def from_nodes(
        cls, nodes: Sequence[NodeResult], status_info: str | None = None
    ) -> ValidationResult:
        """Merge node outcomes and concatenate their messages in order."""
        messages = tuple(m for node in nodes for m in node.messages)
        return cls(
            outcome=merge_outcomes(node.outcome for node in nodes),
            messages=messages,
            status_info=status_info,
        )


def merge_pair(a: Outcome, b: Outcome) -> Outcome:
    """Two equal outcomes stay as they are; any disagreement is PARTIAL."""
    return a if a == b else Outcome.PARTIAL


def merge_outcomes(outcomes: Iterable[Outcome]) -> Outcome:
    """Fold outcomes left to right with merge_pair.

    MISSING does not win over INSTALLED: [INSTALLED, MISSING] is PARTIAL.

    Raises:
        ValueError: If outcomes is empty.
    """
    items = list(outcomes)
    if not items:
        raise ValueError("cannot merge an empty sequence of outcomes")
    return reduce(merge_pair, items)


class Workflow(Protocol):
    """A platform toolchain that can be validated.

    Implementations are picked once at startup; the capability properties
    let callers decide what else is usable without re-running validate().
    """

    @property
    def title(self) -> str: ...

    @property
    def applies_to_host_platform(self) -> bool: ...

    @property
    def can_list_devices(self) -> bool: ...

    @property
    def can_launch_devices(self) -> bool: ...

    async def validate(self) -> ValidationResult: ...
