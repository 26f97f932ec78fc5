"""Whole calendar-unit differences between two days."""

from datetime import date

from dateutil.relativedelta import relativedelta

from .models import DurationUnit


def _truncate(numerator: int, denominator: int) -> int:
    """Integer division truncated toward zero."""
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def whole_months_between(later: date, earlier: date) -> int:
    """
    Count whole months from ``earlier`` to ``later``, signed.

    Month ends clamp: Jan 31 to Feb 28 is one whole month.
    """
    delta = relativedelta(later, earlier)
    return delta.years * 12 + delta.months


def calendar_unit_difference(value: date, reference: date, unit: DurationUnit) -> int:
    """
    Signed difference ``value - reference`` in whole calendar units.

    Partial units are truncated toward zero, so 2 months and 10 days is 2 months
    and -2 months and -10 days is -2 months.

    Args:
        value: Date being validated
        reference: Date compared against
        unit: Calendar unit to count in

    Returns:
        Signed whole-unit difference
    """
    if unit is DurationUnit.DAY:
        return (value - reference).days
    if unit is DurationUnit.WEEK:
        return _truncate((value - reference).days, 7)

    months = whole_months_between(value, reference)
    if unit is DurationUnit.MONTH:
        return months
    if unit is DurationUnit.QUARTER:
        return _truncate(months, 3)
    return _truncate(months, 12)
