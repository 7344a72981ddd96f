"""Dotted numeric versions.

Tools report versions as plain dotted integers ("1.9.0", "1.2"). Comparison
pads the shorter side with zeros, so "1.9" and "1.9.0" are the same version.

Usage:
    installed = Version.parse("1.10")
    if installed >= Version.parse("1.9.0"):
        ...
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

__all__ = [
    "ParseError",
    "Version",
    "compare",
    "meets_minimum",
]

_COMPONENT_RE = re.compile(r"^[0-9]+$")


class ParseError(ValueError):
    """Raised when text is not a dotted numeric version."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"invalid version {text!r}: {reason}")
        self.text = text
        self.reason = reason


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """Immutable dotted numeric version.

    Attributes:
        components: Non-negative integer components, most significant first.
    """

    components: tuple[int, ...]

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse "X.Y.Z" (any number of components).

        Raises:
            ParseError: If the text is empty or a component is not a number.
        """
        stripped = text.strip()
        if not stripped:
            raise ParseError(text, "empty")

        parts = stripped.split(".")
        for part in parts:
            if not _COMPONENT_RE.match(part):
                raise ParseError(text, f"component {part!r} is not a number")
        return cls(tuple(int(part) for part in parts))

    def _normalized(self) -> tuple[int, ...]:
        trimmed = list(self.components)
        while trimmed and trimmed[-1] == 0:
            trimmed.pop()
        return tuple(trimmed)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) < 0

    def __hash__(self) -> int:
        return hash(self._normalized())

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components)


def compare(a: Version, b: Version) -> int:
    """Compare two versions, returning -1, 0 or 1."""
    width = max(len(a.components), len(b.components))
    left = a.components + (0,) * (width - len(a.components))
    right = b.components + (0,) * (width - len(b.components))
    for x, y in zip(left, right):
        if x != y:
            return -1 if x < y else 1
    return 0


def meets_minimum(version_text: str, minimum: Version) -> bool:
    """Return True if version_text parses and is at least minimum.

    Unparseable text counts as not meeting the requirement.
    """
    try:
        return Version.parse(version_text) >= minimum
    except ParseError:
        return False
