"""
Error classification system for calendar date validation.

Configuration errors are raised while a schema is being built. Validation
failures are typed values returned for each rejected input.
"""

from .configuration import (
    ConfigurationError,
    InvalidFormatTemplateError,
    InvalidComparisonArgumentError,
    InvalidDurationOptionError,
    InvalidOptionError,
)
from .validation import (
    ErrorKind,
    ValidationFailure,
    CalendarDateValidationError,
)
from .messages import MESSAGES, render_message

__all__ = [
    # Configuration Errors
    "ConfigurationError",
    "InvalidFormatTemplateError",
    "InvalidComparisonArgumentError",
    "InvalidDurationOptionError",
    "InvalidOptionError",
    # Validation Failures
    "ErrorKind",
    "ValidationFailure",
    "CalendarDateValidationError",
    # Messages
    "MESSAGES",
    "render_message",
]
