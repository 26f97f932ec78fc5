"""
Cast engine.

Projects a validated canonical date into a derived value: an aware datetime,
epoch milliseconds, or its whole-unit distance from today.
"""

from enum import Enum
from typing import Any, Optional, Union

from .dates.models import CanonicalDate
from .errors import InvalidOptionError
from .rules.models import DurationUnit
from .rules.units import calendar_unit_difference
from .utils.time import Clock, epoch_millis, local_midnight, today


class CastKind(str, Enum):
    """Derived representations a validated date can be cast to."""
    DATE = "date"
    NUMBER = "number"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    QUARTERS = "quarters"
    YEARS = "years"


UNIT_CASTS: dict[CastKind, DurationUnit] = {
    CastKind.DAYS: DurationUnit.DAY,
    CastKind.WEEKS: DurationUnit.WEEK,
    CastKind.MONTHS: DurationUnit.MONTH,
    CastKind.QUARTERS: DurationUnit.QUARTER,
    CastKind.YEARS: DurationUnit.YEAR,
}


def parse_cast_kind(kind: Union[CastKind, str]) -> CastKind:
    """
    Resolve a cast kind given as an enum member or its string value.

    Raises:
        InvalidOptionError: If the kind is not one of the supported casts
    """
    if isinstance(kind, CastKind):
        return kind
    if isinstance(kind, str):
        try:
            return CastKind(kind)
        except ValueError:
            pass
    choices = ", ".join(member.value for member in CastKind)
    raise InvalidOptionError(
        f"cast expected one of {choices}, got '{kind}'", option="cast", value=kind
    )


def cast(value: CanonicalDate, kind: Union[CastKind, str],
         clock: Optional[Clock] = None) -> Any:
    """
    Cast a validated date.

    Args:
        value: Canonical date that already passed every rule
        kind: Target representation
        clock: Clock used for distance casts

    Returns:
        Aware datetime at local midnight for ``date``, epoch milliseconds for
        ``number``, otherwise the absolute whole-unit distance from today
    """
    kind = parse_cast_kind(kind)

    if kind is CastKind.DATE:
        return local_midnight(value.day)
    if kind is CastKind.NUMBER:
        return epoch_millis(value.day)

    unit = UNIT_CASTS[kind]
    return abs(calendar_unit_difference(value.day, today(clock), unit))
