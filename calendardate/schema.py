"""
Validation configuration and its builder.

ValidationConfig is frozen; every builder step returns a new config (and a new
CalendarDateSchema wrapping it), so a schema can be shared freely and extended
without affecting earlier copies. Bad builder arguments raise configuration
errors immediately.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Optional, Union

from .casting import CastKind, parse_cast_kind
from .config.defaults import DEFAULTS
from .dates.models import FormatTemplate
from .dates.normalizer import DateNormalizer, normalizer as default_normalizer
from .dates.parsers import CallbackParser, FormatSpec, TemplateParser
from .dates.template import compile_template
from .engine import ValidationResult, attempt as attempt_value, validate as validate_value
from .errors import InvalidFormatTemplateError, InvalidOptionError
from .logging.config import get_logger
from .rules.duration import parse_duration_options
from .rules.models import ComparisonOperator, ComparisonRule

logger = get_logger(__name__)

DurationOptions = Optional[Mapping[str, Any]]


def build_format(fmt: Union[str, Callable[[str], Any], FormatTemplate]) -> FormatSpec:
    """
    Build a parser from a template string or a parse callback.

    Raises:
        InvalidFormatTemplateError: If the template is invalid or the argument
            is neither a string nor a callable
    """
    if isinstance(fmt, FormatTemplate):
        return TemplateParser(fmt)
    if isinstance(fmt, str):
        return TemplateParser(compile_template(fmt))
    if callable(fmt):
        return CallbackParser(fmt)
    raise InvalidFormatTemplateError(
        f"format expected non-empty string or a function, got '{fmt}'", template=fmt
    )


def build_rule(operator: Union[ComparisonOperator, str], reference: Any,
               options: DurationOptions = None, *, code: Optional[str] = None,
               normalizer: Optional[DateNormalizer] = None) -> ComparisonRule:
    """
    Build a comparison rule.

    Args:
        operator: eq, ge, gt, le or lt
        reference: Keyword, date/datetime, ISO date string or Reference
        options: Duration options with any of exact, min and max
        code: Failure code, defaults to ``calendardate.<operator>``
        normalizer: Normalizer used to snapshot the reference

    Raises:
        InvalidComparisonArgumentError: If the reference is not a usable date
        InvalidDurationOptionError: If the duration options are invalid
    """
    normalizer = normalizer or default_normalizer
    return ComparisonRule(
        operator=ComparisonOperator(operator),
        reference=normalizer.reference(reference),
        constraints=parse_duration_options(options),
        code=code or "",
    )


def default_format() -> FormatSpec:
    return TemplateParser(compile_template(DEFAULTS.format.template))


@dataclass(frozen=True)
class ValidationConfig:
    """Everything needed to validate one calendar date field."""
    format: FormatSpec = field(default_factory=default_format)
    trim: bool = DEFAULTS.validation.trim
    rules: tuple[ComparisonRule, ...] = ()
    cast: Optional[CastKind] = None

    def with_format(self, fmt: Union[str, Callable[[str], Any], FormatTemplate]) -> "ValidationConfig":
        return replace(self, format=build_format(fmt))

    def with_trim(self, enabled: bool = True) -> "ValidationConfig":
        if not isinstance(enabled, bool):
            raise InvalidOptionError(
                f"enabled expected boolean, got '{enabled}'", option="trim", value=enabled
            )
        return replace(self, trim=enabled)

    def with_rule(self, rule: ComparisonRule) -> "ValidationConfig":
        return replace(self, rules=self.rules + (rule,))

    def with_cast(self, kind: Union[CastKind, str]) -> "ValidationConfig":
        return replace(self, cast=parse_cast_kind(kind))


class CalendarDateSchema:
    """Fluent, immutable builder for calendar date validation.

    Example::

        schema = calendardate().format("DD/MM/YYYY").gt("2021-06-28", {"min": "4 years"})
        result = schema.validate("30/06/2025")
    """

    def __init__(self, config: Optional[ValidationConfig] = None,
                 normalizer: Optional[DateNormalizer] = None):
        self.config = config or ValidationConfig()
        self.normalizer = normalizer or default_normalizer

    def _with(self, config: ValidationConfig) -> "CalendarDateSchema":
        return CalendarDateSchema(config, self.normalizer)

    def _compare(self, operator: ComparisonOperator, date: Any,
                 options: DurationOptions, code: Optional[str] = None) -> "CalendarDateSchema":
        rule = build_rule(operator, date, options, code=code, normalizer=self.normalizer)
        logger.debug("Added comparison rule", rule=rule.code, reference=str(rule.reference))
        return self._with(self.config.with_rule(rule))

    def format(self, fmt: Union[str, Callable[[str], Any], FormatTemplate]) -> "CalendarDateSchema":
        """Require the value to match a template, or parse it with a callback."""
        return self._with(self.config.with_format(fmt))

    def trim(self, enabled: bool = True) -> "CalendarDateSchema":
        """Forbid leading/trailing whitespace, stripping it when converting."""
        return self._with(self.config.with_trim(enabled))

    def eq(self, date: Any, options: DurationOptions = None) -> "CalendarDateSchema":
        return self._compare(ComparisonOperator.EQ, date, options)

    def ge(self, date: Any, options: DurationOptions = None) -> "CalendarDateSchema":
        return self._compare(ComparisonOperator.GE, date, options)

    def gt(self, date: Any, options: DurationOptions = None) -> "CalendarDateSchema":
        return self._compare(ComparisonOperator.GT, date, options)

    def le(self, date: Any, options: DurationOptions = None) -> "CalendarDateSchema":
        return self._compare(ComparisonOperator.LE, date, options)

    def lt(self, date: Any, options: DurationOptions = None) -> "CalendarDateSchema":
        return self._compare(ComparisonOperator.LT, date, options)

    def future(self, options: DurationOptions = None) -> "CalendarDateSchema":
        """Require a date after today."""
        return self._compare(ComparisonOperator.GT, "today", options, code="calendardate.future")

    def past(self, options: DurationOptions = None) -> "CalendarDateSchema":
        """Require a date before today."""
        return self._compare(ComparisonOperator.LT, "today", options, code="calendardate.past")

    def cast(self, kind: Union[CastKind, str]) -> "CalendarDateSchema":
        """Return a derived value instead of the canonical string on success."""
        return self._with(self.config.with_cast(kind))

    def validate(self, raw: Any, **kwargs) -> ValidationResult:
        """Validate a value; see calendardate.engine.validate for keyword arguments."""
        return validate_value(raw, self.config, normalizer=self.normalizer, **kwargs)

    def attempt(self, raw: Any, **kwargs):
        """Validate a value and return it, raising CalendarDateValidationError on failure."""
        return attempt_value(raw, self.config, normalizer=self.normalizer, **kwargs)

    def __repr__(self) -> str:
        return (f"CalendarDateSchema(format={self.config.format.description!r}, "
                f"trim={self.config.trim}, rules={len(self.config.rules)}, "
                f"cast={self.config.cast.value if self.config.cast else None})")


def calendardate() -> CalendarDateSchema:
    """Start a new calendar date schema with the default YYYY-MM-DD format."""
    return CalendarDateSchema()
