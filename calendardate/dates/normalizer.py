"""
Reference date normalization.

Converts the values a comparison rule can be built against (relative
keywords, date objects, ISO strings, external references) into canonical
dates. Literal values are snapshotted when the rule is built; keywords and
external references are resolved on every validation.
"""

from datetime import date, datetime
from numbers import Real
from typing import Any, Mapping, Optional

from ..errors import InvalidComparisonArgumentError
from ..utils.time import Clock, from_epoch_millis, shift_days, today
from ..rules.models import (
    DateKeyword,
    KeywordReference,
    LiteralReference,
    Reference,
    ReferenceSpec,
)
from .models import CanonicalDate

KEYWORDS = {keyword.value: keyword for keyword in DateKeyword}

INVALID_ARGUMENT_MESSAGE = "date expected date instance or valid ISO formatted calendar date"


def _calendar_day(value: date) -> date:
    """Local calendar day of a date or datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


class DateNormalizer:
    """Turns reference values into canonical dates."""

    def reference(self, value: Any) -> ReferenceSpec:
        """
        Build a reference for a comparison rule at configuration time.

        Args:
            value: Keyword, date/datetime, strict ISO date string or Reference

        Returns:
            LiteralReference (snapshotted by value), KeywordReference or Reference

        Raises:
            InvalidComparisonArgumentError: For any other value
        """
        if isinstance(value, Reference):
            return value

        if isinstance(value, CanonicalDate):
            return LiteralReference(value)

        if isinstance(value, date):
            return LiteralReference(CanonicalDate(_calendar_day(value)))

        if isinstance(value, str):
            if value in KEYWORDS:
                return KeywordReference(KEYWORDS[value])
            canonical = CanonicalDate.try_from_iso(value)
            if canonical is not None:
                return LiteralReference(canonical)

        raise InvalidComparisonArgumentError(
            f"{INVALID_ARGUMENT_MESSAGE}, got '{value}'", argument=value
        )

    def resolve(self, reference: ReferenceSpec,
                context: Optional[Mapping[str, Any]] = None,
                clock: Optional[Clock] = None) -> CanonicalDate:
        """
        Resolve a reference to a canonical date for one validation call.

        Args:
            reference: Reference built by ``reference``
            context: Mapping that external references are looked up in
            clock: Clock for relative keywords

        Returns:
            CanonicalDate

        Raises:
            KeyError: If an external reference is missing from the context
            ValueError: If an external reference holds a value that is not a date
        """
        if isinstance(reference, LiteralReference):
            return reference.date
        if isinstance(reference, KeywordReference):
            return self.from_keyword(reference.keyword, clock)
        return self.normalize(reference.resolve(context), clock)

    def from_keyword(self, keyword: DateKeyword, clock: Optional[Clock] = None) -> CanonicalDate:
        """Resolve today/tomorrow/yesterday against the clock."""
        return CanonicalDate(shift_days(today(clock), keyword.offset_days))

    def normalize(self, value: Any, clock: Optional[Clock] = None) -> CanonicalDate:
        """
        Normalize an externally supplied date value.

        Args:
            value: Keyword, date/datetime, strict ISO date string or epoch milliseconds
            clock: Clock for relative keywords

        Returns:
            CanonicalDate

        Raises:
            ValueError: If the value cannot be read as a calendar day
        """
        if isinstance(value, CanonicalDate):
            return value

        if isinstance(value, date):
            return CanonicalDate(_calendar_day(value))

        if isinstance(value, str):
            if value in KEYWORDS:
                return self.from_keyword(KEYWORDS[value], clock)
            return CanonicalDate.from_iso(value)

        if isinstance(value, Real) and not isinstance(value, bool):
            try:
                return CanonicalDate(from_epoch_millis(float(value)))
            except (OverflowError, OSError) as e:
                raise ValueError(f"Timestamp out of range: {value}") from e

        raise ValueError(f"Cannot normalize {type(value).__name__} to a calendar date")


normalizer = DateNormalizer()
