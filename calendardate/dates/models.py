"""
Canonical date models.

This module defines immutable data structures for calendar days and for
compiled format templates. Everything here is built once and never mutated.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

CANONICAL_FORMAT = "YYYY-MM-DD"

ISO_DATE_RE = re.compile(r"^(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})$")


@dataclass(frozen=True, order=True)
class CanonicalDate:
    """A real Gregorian calendar day, serialized as YYYY-MM-DD."""
    day: date

    def __post_init__(self):
        # datetime is a date subclass; keep only the calendar day
        if isinstance(self.day, datetime):
            object.__setattr__(self, "day", self.day.date())

    @classmethod
    def from_iso(cls, text: str) -> "CanonicalDate":
        """
        Parse the strict canonical form.

        Args:
            text: Zero-padded ``YYYY-MM-DD`` string

        Returns:
            CanonicalDate for that day

        Raises:
            ValueError: If the text is not canonical or names an impossible day
        """
        match = ISO_DATE_RE.fullmatch(text)
        if not match:
            raise ValueError(f"Not an ISO formatted calendar date: {text!r}")
        return cls.from_parts(int(match["year"]), int(match["month"]), int(match["day"]))

    @classmethod
    def from_parts(cls, year: int, month: int, day: int) -> "CanonicalDate":
        """Build from components, raising ValueError for impossible days."""
        return cls(date(year, month, day))

    @classmethod
    def try_from_iso(cls, text: str) -> Optional["CanonicalDate"]:
        """Like from_iso, but returns None instead of raising."""
        try:
            return cls.from_iso(text)
        except ValueError:
            return None

    def isoformat(self) -> str:
        return f"{self.day.year:04d}-{self.day.month:02d}-{self.day.day:02d}"

    def days_since(self, other: "CanonicalDate") -> int:
        """Signed number of calendar days from ``other`` to this day."""
        return (self.day - other.day).days

    def __str__(self) -> str:
        return self.isoformat()


class ComponentKind(str, Enum):
    """Calendar components a template can name."""
    YEAR = "Y"
    MONTH = "M"
    DAY = "D"


@dataclass(frozen=True)
class ComponentSpec:
    """One template token and the width it matches."""
    kind: ComponentKind
    width: int          # 1 (variable 1-2 digits), 2 or 4
    token: str          # YYYY, YY, MM, M, DD or D

    @property
    def variable_width(self) -> bool:
        return self.width == 1


@dataclass(frozen=True)
class FormatTemplate:
    """Compiled format template with literal separators between components."""
    source: str
    components: tuple[ComponentSpec, ...]
    separators: tuple[str, ...]                      # separators[i] sits after components[i]
    pattern: re.Pattern

    @property
    def kinds(self) -> tuple[ComponentKind, ...]:
        return tuple(component.kind for component in self.components)

    @property
    def is_partial(self) -> bool:
        """True when the template omits one of year, month or day."""
        return len(self.components) < 3

    def component(self, kind: ComponentKind) -> Optional[ComponentSpec]:
        """Get the component of the given kind, None if the template omits it."""
        for component in self.components:
            if component.kind == kind:
                return component
        return None

    def format(self, value: CanonicalDate) -> str:
        """Render a date with this template, the inverse of parsing it."""
        parts = []
        for index, component in enumerate(self.components):
            parts.append(_render_component(component, value.day))
            if index < len(self.separators):
                parts.append(self.separators[index])
        return "".join(parts)

    def __str__(self) -> str:
        return self.source


def _render_component(component: ComponentSpec, day: date) -> str:
    if component.kind == ComponentKind.YEAR:
        if component.width == 2:
            return f"{day.year % 100:02d}"
        return f"{day.year:04d}"
    number = day.month if component.kind == ComponentKind.MONTH else day.day
    if component.variable_width:
        return str(number)
    return f"{number:02d}"
