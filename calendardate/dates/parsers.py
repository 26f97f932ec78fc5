"""
Strict date parsers for converting raw strings to canonical dates.

Two parser variants share one interface, ``parse(raw, clock) -> CanonicalDate``:
TemplateParser matches a compiled FormatTemplate, CallbackParser delegates to
a caller-supplied function. Parse failures raise ParseError subclasses, which
the validation pipeline turns into typed failures.
"""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from numbers import Integral
from typing import Any, Callable, Optional, Union

from ..config.defaults import DEFAULTS
from ..logging.config import get_logger
from ..utils.time import Clock, today
from .models import CanonicalDate, ComponentKind, FormatTemplate

logger = get_logger(__name__)

ParseCallback = Callable[[str], Any]


class ParseError(Exception):
    """Raised when a raw string cannot be turned into a calendar date."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class FormatMismatchError(ParseError):
    """Raised when a string does not strictly match a format template."""

    def __init__(self, message: str, raw: Optional[str] = None,
                 template: Optional[str] = None):
        super().__init__(message, raw)
        self.template = template


class CallbackParseError(ParseError):
    """Raised when a parse callback fails or returns an unusable value."""

    def __init__(self, message: str, raw: Optional[str] = None, returned: Any = None):
        super().__init__(message, raw)
        self.returned = returned


def expand_two_digit_year(year: int, pivot: int = DEFAULTS.format.two_digit_year_pivot) -> int:
    """
    Expand a two-digit year to a full year.

    Args:
        year: Year in the range 0-99
        pivot: Years above the pivot map to the 1900s, the rest to the 2000s

    Returns:
        Four-digit year
    """
    return year + (1900 if year > pivot else 2000)


@dataclass(frozen=True)
class TemplateParser:
    """Parses strings that strictly match a compiled format template."""
    template: FormatTemplate
    year_pivot: int = DEFAULTS.format.two_digit_year_pivot

    @property
    def description(self) -> str:
        return self.template.source

    def parse(self, raw: str, clock: Optional[Clock] = None) -> CanonicalDate:
        """
        Parse a raw string with the template.

        Args:
            raw: Input string
            clock: Clock used to fill a component omitted by a partial template

        Returns:
            CanonicalDate for the matched day

        Raises:
            FormatMismatchError: If the string does not match or names an impossible day
        """
        match = self.template.pattern.fullmatch(raw)
        if not match:
            raise FormatMismatchError(
                f"{raw!r} does not match format {self.template.source!r}",
                raw=raw, template=self.template.source,
            )

        fields = match.groupdict()
        year, month, day = self._fill_missing(fields, clock)

        try:
            return CanonicalDate.from_parts(year, month, day)
        except ValueError as e:
            raise FormatMismatchError(
                f"{raw!r} is not a calendar date: {e}",
                raw=raw, template=self.template.source,
            )

    def _fill_missing(self, fields: dict[str, Optional[str]],
                      clock: Optional[Clock]) -> tuple[int, int, int]:
        """Resolve year, month and day, taking omitted components from today.

        A day taken from today is clamped to the last day of the parsed month.
        """
        current: Optional[date] = None
        if self.template.is_partial:
            current = today(clock)

        if fields.get("year") is not None:
            year = int(fields["year"])
            if self.template.component(ComponentKind.YEAR).width == 2:
                year = expand_two_digit_year(year, self.year_pivot)
        else:
            year = current.year

        if fields.get("month") is not None:
            month = int(fields["month"])
        else:
            month = current.month

        if fields.get("day") is not None:
            day = int(fields["day"])
        else:
            day = current.day
            if 1 <= month <= 12:
                day = min(day, monthrange(year, month)[1])

        return year, month, day


@dataclass(frozen=True)
class CallbackParser:
    """Parses strings with a caller-supplied function.

    The callback returns either a sequence ``[year, month, day, ...]`` with a
    0-based month (0 is January), or a date/datetime. Any exception it raises
    becomes a CallbackParseError.
    """
    callback: ParseCallback

    @property
    def description(self) -> str:
        return getattr(self.callback, "__name__", repr(self.callback))

    def parse(self, raw: str, clock: Optional[Clock] = None) -> CanonicalDate:
        try:
            returned = self.callback(raw)
        except Exception as e:
            logger.debug("Parse callback raised", callback=self.description, error=str(e))
            raise CallbackParseError(f"Parse callback raised: {e}", raw=raw) from e

        return self._to_canonical(raw, returned)

    def _to_canonical(self, raw: str, returned: Any) -> CanonicalDate:
        if isinstance(returned, date):
            return CanonicalDate(returned)

        if not isinstance(returned, (list, tuple)) or len(returned) < 3:
            raise CallbackParseError(
                f"Parse callback returned {type(returned).__name__}, expected [year, month, day]",
                raw=raw, returned=returned,
            )

        parts = returned[:3]
        if not all(isinstance(part, Integral) and not isinstance(part, bool) for part in parts):
            raise CallbackParseError(
                "Parse callback returned non-integer date components",
                raw=raw, returned=returned,
            )

        try:
            return CanonicalDate.from_parts(int(parts[0]), int(parts[1]) + 1, int(parts[2]))
        except (ValueError, OverflowError) as e:
            raise CallbackParseError(
                f"Parse callback returned an impossible date: {e}",
                raw=raw, returned=returned,
            )


FormatSpec = Union[TemplateParser, CallbackParser]
