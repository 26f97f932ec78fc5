"""
calendardate - Calendar Date Validation

Validates that strings represent calendar dates in a configured format,
normalizes them to YYYY-MM-DD, and enforces ordering and duration constraints
against reference dates.
"""

from .casting import CastKind, cast
from .dates.models import CanonicalDate
from .engine import ValidationResult, attempt, validate
from .errors import (
    CalendarDateValidationError,
    ConfigurationError,
    ErrorKind,
    InvalidComparisonArgumentError,
    InvalidDurationOptionError,
    InvalidFormatTemplateError,
    InvalidOptionError,
    ValidationFailure,
)
from .rules.models import Reference
from .schema import CalendarDateSchema, ValidationConfig, calendardate

__version__ = "0.1.0"

__all__ = [
    "CalendarDateSchema",
    "CalendarDateValidationError",
    "CanonicalDate",
    "CastKind",
    "ConfigurationError",
    "ErrorKind",
    "InvalidComparisonArgumentError",
    "InvalidDurationOptionError",
    "InvalidFormatTemplateError",
    "InvalidOptionError",
    "Reference",
    "ValidationConfig",
    "ValidationFailure",
    "ValidationResult",
    "attempt",
    "calendardate",
    "cast",
    "validate",
]
