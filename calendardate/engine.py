"""
Main validation pipeline.

Coordinates one validation call:
Raw value → Base checks → Date Parser → Comparison Rules → Cast

Input problems are returned as typed failures, never raised. The wall clock is
sampled once per call so every rule and the cast agree on today's date.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional

from .casting import cast as cast_value
from .config.defaults import DEFAULTS
from .dates.models import CanonicalDate
from .dates.normalizer import DateNormalizer
from .dates.parsers import CallbackParseError, FormatMismatchError
from .errors import CalendarDateValidationError, ErrorKind, ValidationFailure
from .errors.messages import DEFAULT_LABEL
from .logging.config import get_logger
from .rules.evaluator import ComparisonEvaluator
from .utils.time import Clock, FixedClock, resolve_clock

if TYPE_CHECKING:
    from .schema import ValidationConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one value."""

    # Canonical string, or the cast value when a cast is configured
    value: Any = None
    canonical: Optional[CanonicalDate] = None
    errors: tuple[ValidationFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def error(self) -> Optional[ValidationFailure]:
        """First failure encountered, None on success."""
        return self.errors[0] if self.errors else None

    @classmethod
    def success(cls, value: Any, canonical: CanonicalDate) -> "ValidationResult":
        """Create successful result."""
        return cls(value=value, canonical=canonical)

    @classmethod
    def failure(cls, errors: list[ValidationFailure], value: Any = None,
                canonical: Optional[CanonicalDate] = None) -> "ValidationResult":
        """Create failed result carrying the (possibly trimmed) input."""
        return cls(value=value, canonical=canonical, errors=tuple(errors))


def _fail(kind: ErrorKind, code: str, value: Any, **details: Any) -> ValidationResult:
    failure = ValidationFailure(kind=kind, code=code, value=value, details=details)
    logger.debug("Calendar date rejected", kind=kind.value, code=code, value=repr(value))
    return ValidationResult.failure([failure], value=value)


def validate(raw: Any, config: "ValidationConfig", *,
             context: Optional[Mapping[str, Any]] = None,
             convert: Optional[bool] = None,
             abort_early: Optional[bool] = None,
             clock: Optional[Clock] = None,
             normalizer: Optional[DateNormalizer] = None) -> ValidationResult:
    """
    Validate a raw value against a configuration.

    Args:
        raw: Value to validate; only strings can pass
        config: Validation configuration
        context: Mapping that external references are resolved against
        convert: Strip whitespace when trim is enabled instead of rejecting it
        abort_early: Stop at the first failing comparison rule
        clock: Clock for today/tomorrow/yesterday, partial templates and casts
        normalizer: Normalizer for reference resolution

    Returns:
        ValidationResult with the canonical (or cast) value, or the failures
    """
    convert = DEFAULTS.validation.convert if convert is None else convert
    abort_early = DEFAULTS.validation.abort_early if abort_early is None else abort_early
    clock = FixedClock(resolve_clock(clock).now())

    value = raw
    if config.trim and convert and isinstance(value, str):
        value = value.strip()

    if not isinstance(value, str):
        return _fail(ErrorKind.NOT_A_STRING, "calendardate.base", value)

    if value == "":
        return _fail(ErrorKind.EMPTY_STRING, "calendardate.empty", value)

    if config.trim and value != value.strip():
        return _fail(ErrorKind.NOT_TRIMMED, "calendardate.trim", value)

    try:
        canonical = config.format.parse(value, clock)
    except FormatMismatchError:
        return _fail(ErrorKind.DATE_DOES_NOT_MATCH_FORMAT, "calendardate.format", value,
                     format=config.format.description)
    except CallbackParseError:
        return _fail(ErrorKind.CALLBACK_PARSE_FAILED, "calendardate.parse", value)

    evaluator = ComparisonEvaluator(normalizer)
    failures = evaluator.evaluate_all(canonical, config.rules, context=context,
                                      clock=clock, abort_early=abort_early)
    if failures:
        logger.debug("Calendar date failed comparison rules", value=str(canonical),
                     codes=[failure.code for failure in failures])
        return ValidationResult.failure(failures, value=str(canonical), canonical=canonical)

    if config.cast is None:
        return ValidationResult.success(str(canonical), canonical)
    return ValidationResult.success(cast_value(canonical, config.cast, clock), canonical)


def attempt(raw: Any, config: "ValidationConfig", *, label: str = DEFAULT_LABEL,
            **kwargs: Any) -> Any:
    """
    Validate a raw value and return the validated value.

    Args:
        raw: Value to validate
        config: Validation configuration
        label: Field name used in the error message
        **kwargs: Keyword arguments accepted by validate

    Returns:
        Canonical string, or the cast value when a cast is configured

    Raises:
        CalendarDateValidationError: If validation fails
    """
    result = validate(raw, config, **kwargs)
    if not result.ok:
        raise CalendarDateValidationError(result.errors, label=label, value=raw)
    return result.value
