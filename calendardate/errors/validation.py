"""
Input validation failure classifications.

Failures describe why a raw value was rejected. They are returned as data by
``validate`` and only raised, wrapped in CalendarDateValidationError, by
``attempt``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from .messages import DEFAULT_LABEL, render_message


class ErrorKind(str, Enum):
    """Kinds of input validation failure."""
    NOT_A_STRING = "not_a_string"
    EMPTY_STRING = "empty_string"
    NOT_TRIMMED = "not_trimmed"
    DATE_DOES_NOT_MATCH_FORMAT = "date_does_not_match_format"
    CALLBACK_PARSE_FAILED = "callback_parse_failed"
    ORDERING_VIOLATION = "ordering_violation"
    DURATION_VIOLATION = "duration_violation"
    INVALID_REFERENCE = "invalid_reference"


@dataclass(frozen=True)
class ValidationFailure:
    """A single typed failure with the values needed to describe it."""
    kind: ErrorKind
    code: str                                   # message key, e.g. calendardate.gt
    value: Any                                  # offending raw or canonical value
    details: Mapping[str, Any] = field(default_factory=dict)

    def message(self, label: str = DEFAULT_LABEL) -> str:
        """Render the default message for this failure."""
        values = {"value": self.value}
        values.update(self.details)
        return render_message(self.code, values, label)


class CalendarDateValidationError(Exception):
    """Raised by ``attempt`` when a value fails validation."""

    def __init__(self, failures: Sequence[ValidationFailure],
                 label: str = DEFAULT_LABEL, value: Any = None):
        self.failures = tuple(failures)
        self.label = label
        self.value = value
        super().__init__(". ".join(failure.message(label) for failure in self.failures))

    @property
    def failure(self) -> Optional[ValidationFailure]:
        """First failure encountered."""
        return self.failures[0] if self.failures else None
