"""
Comparison rule data models.

This module defines immutable structures for durations, comparison operators,
reference dates and the rules built from them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping, Optional, Union

from ..dates.models import CanonicalDate


class DurationUnit(str, Enum):
    """Calendar units a duration can be expressed in."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


UNIT_ALIASES: dict[str, DurationUnit] = {
    "d": DurationUnit.DAY, "day": DurationUnit.DAY, "days": DurationUnit.DAY,
    "w": DurationUnit.WEEK, "week": DurationUnit.WEEK, "weeks": DurationUnit.WEEK,
    "M": DurationUnit.MONTH, "month": DurationUnit.MONTH, "months": DurationUnit.MONTH,
    "Q": DurationUnit.QUARTER, "quarter": DurationUnit.QUARTER, "quarters": DurationUnit.QUARTER,
    "y": DurationUnit.YEAR, "year": DurationUnit.YEAR, "years": DurationUnit.YEAR,
}


@dataclass(frozen=True)
class DurationSpec:
    """A non-negative whole number of calendar units."""
    quantity: int
    unit: DurationUnit

    def __str__(self) -> str:
        unit = self.unit.value if self.quantity == 1 else self.unit.plural
        return f"{self.quantity} {unit}"


@dataclass(frozen=True)
class DurationConstraints:
    """Bounds on the distance between a value and its reference."""
    exact: Optional[DurationSpec] = None
    min: Optional[DurationSpec] = None
    max: Optional[DurationSpec] = None

    def items(self) -> Iterator[tuple[str, DurationSpec]]:
        """Yield configured constraints in evaluation order: exact, min, max."""
        for name in ("exact", "min", "max"):
            spec = getattr(self, name)
            if spec is not None:
                yield name, spec

    def __bool__(self) -> bool:
        return any(True for _ in self.items())


NO_CONSTRAINTS = DurationConstraints()


class ComparisonOperator(str, Enum):
    """Ordering predicates between a value and its reference."""
    EQ = "eq"
    GE = "ge"
    GT = "gt"
    LE = "le"
    LT = "lt"

    def accepts(self, diff: int) -> bool:
        """Check a signed day difference (value - reference) against the operator."""
        if self is ComparisonOperator.EQ:
            return diff == 0
        if self is ComparisonOperator.GE:
            return diff >= 0
        if self is ComparisonOperator.GT:
            return diff > 0
        if self is ComparisonOperator.LE:
            return diff <= 0
        return diff < 0


class DateKeyword(str, Enum):
    """Relative keywords resolved against the clock."""
    TODAY = "today"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"

    @property
    def offset_days(self) -> int:
        return {"today": 0, "tomorrow": 1, "yesterday": -1}[self.value]


@dataclass(frozen=True)
class LiteralReference:
    """A reference date fixed when the rule was built."""
    date: CanonicalDate

    def __str__(self) -> str:
        return str(self.date)


@dataclass(frozen=True)
class KeywordReference:
    """A relative keyword, re-derived from the clock on every validation."""
    keyword: DateKeyword

    def __str__(self) -> str:
        return self.keyword.value


_MISSING = object()


@dataclass(frozen=True)
class Reference:
    """A reference to a sibling value supplied at validation time.

    ``key`` is a dotted path looked up in the validation context mapping,
    e.g. ``Reference("booking.start")``.
    """
    key: str

    def resolve(self, context: Optional[Mapping[str, Any]]) -> Any:
        """
        Look the key up in a context mapping.

        Args:
            context: Mapping supplied to validate

        Returns:
            The referenced value

        Raises:
            KeyError: If any segment of the path is missing
        """
        current: Any = context if context is not None else {}
        for segment in self.key.split("."):
            if not isinstance(current, Mapping):
                raise KeyError(self.key)
            current = current.get(segment, _MISSING)
            if current is _MISSING:
                raise KeyError(self.key)
        return current

    def __str__(self) -> str:
        return f"ref:{self.key}"


ReferenceSpec = Union[LiteralReference, KeywordReference, Reference]


@dataclass(frozen=True)
class ComparisonRule:
    """An ordering check plus optional duration bounds against one reference."""
    operator: ComparisonOperator
    reference: ReferenceSpec
    constraints: DurationConstraints = NO_CONSTRAINTS
    code: str = ""

    def __post_init__(self):
        if not self.code:
            object.__setattr__(self, "code", f"calendardate.{self.operator.value}")
