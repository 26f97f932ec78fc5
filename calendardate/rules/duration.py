"""
Duration parsing for comparison rule options.

Durations are written as ``"2 months"`` or as a ``(quantity, unit)`` pair.
Option mappings combine them under the keys ``exact``, ``min`` and ``max``.
"""

import re
from numbers import Integral
from typing import Any, Mapping, Optional

from ..errors import InvalidDurationOptionError
from .models import (
    NO_CONSTRAINTS,
    UNIT_ALIASES,
    DurationConstraints,
    DurationSpec,
    DurationUnit,
)

DURATION_RE = re.compile(r"(?P<quantity>[0-9]+) (?P<unit>[A-Za-z]+)")

OPTION_KEYS = ("exact", "min", "max")

# Units that convert exactly into a common base: days or months
_BASE_UNITS: dict[DurationUnit, tuple[str, int]] = {
    DurationUnit.DAY: ("days", 1),
    DurationUnit.WEEK: ("days", 7),
    DurationUnit.MONTH: ("months", 1),
    DurationUnit.QUARTER: ("months", 3),
    DurationUnit.YEAR: ("months", 12),
}


def parse_unit(unit: Any, option: Optional[str] = None) -> DurationUnit:
    """
    Resolve a unit name or alias.

    Args:
        unit: DurationUnit or one of its short/long forms
        option: Option name, for error reporting

    Returns:
        DurationUnit

    Raises:
        InvalidDurationOptionError: If the unit is not recognized
    """
    if isinstance(unit, DurationUnit):
        return unit
    if isinstance(unit, str) and unit in UNIT_ALIASES:
        return UNIT_ALIASES[unit]
    raise InvalidDurationOptionError(
        f"Unknown duration unit: '{unit}'", option=option, value=unit
    )


def parse_duration(value: Any, option: Optional[str] = None) -> DurationSpec:
    """
    Parse a duration literal.

    Args:
        value: ``"<quantity> <unit>"`` string, ``(quantity, unit)`` pair or DurationSpec
        option: Option name, for error reporting

    Returns:
        Normalized DurationSpec

    Raises:
        InvalidDurationOptionError: If the literal is malformed
    """
    if isinstance(value, DurationSpec):
        return value

    if isinstance(value, str):
        match = DURATION_RE.fullmatch(value)
        if not match:
            raise InvalidDurationOptionError(
                f"Invalid duration: '{value}', expected '<quantity> <unit>'",
                option=option, value=value,
            )
        return DurationSpec(int(match["quantity"]), parse_unit(match["unit"], option))

    if isinstance(value, (list, tuple)) and len(value) == 2:
        quantity, unit = value
        if not isinstance(quantity, Integral) or isinstance(quantity, bool) or quantity < 0:
            raise InvalidDurationOptionError(
                f"Duration quantity must be a non-negative integer, got '{quantity}'",
                option=option, value=value,
            )
        return DurationSpec(int(quantity), parse_unit(unit, option))

    raise InvalidDurationOptionError(
        f"Invalid duration: '{value}', expected a string or a (quantity, unit) pair",
        option=option, value=value,
    )


def parse_duration_options(options: Optional[Mapping[str, Any]]) -> DurationConstraints:
    """
    Parse a comparison rule's duration options.

    Args:
        options: Mapping with any of ``exact``, ``min`` and ``max``, or None

    Returns:
        DurationConstraints

    Raises:
        InvalidDurationOptionError: On unknown keys, malformed durations, ``exact``
            combined with a bound, or a ``min`` that exceeds ``max``
    """
    if options is None:
        return NO_CONSTRAINTS

    if not isinstance(options, Mapping):
        raise InvalidDurationOptionError(
            f"Duration options must be a mapping, got '{options}'", value=options
        )

    unknown = [key for key in options if key not in OPTION_KEYS]
    if unknown:
        raise InvalidDurationOptionError(
            f"Unknown duration option(s): {', '.join(map(str, unknown))}",
            option=str(unknown[0]), value=options,
        )

    parsed = {
        key: parse_duration(options[key], key)
        for key in OPTION_KEYS
        if options.get(key) is not None
    }

    if "exact" in parsed and ("min" in parsed or "max" in parsed):
        raise InvalidDurationOptionError(
            "Duration option 'exact' cannot be combined with 'min' or 'max'",
            option="exact", value=options,
        )

    constraints = DurationConstraints(**parsed)
    check_satisfiable(constraints)
    return constraints


def check_satisfiable(constraints: DurationConstraints) -> None:
    """
    Reject a min/max range that no date can satisfy.

    Bounds are compared only when both convert exactly into the same base unit
    (days for day/week, months for month/quarter/year).

    Raises:
        InvalidDurationOptionError: If ``min`` is greater than ``max``
    """
    if constraints.min is None or constraints.max is None:
        return

    low_base, low_factor = _BASE_UNITS[constraints.min.unit]
    high_base, high_factor = _BASE_UNITS[constraints.max.unit]
    if low_base != high_base:
        return

    if constraints.min.quantity * low_factor > constraints.max.quantity * high_factor:
        raise InvalidDurationOptionError(
            f"Duration range is empty: min {constraints.min} exceeds max {constraints.max}",
            option="min", value={"min": str(constraints.min), "max": str(constraints.max)},
        )
