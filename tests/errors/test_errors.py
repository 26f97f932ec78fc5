"""
Tests for error classification and failure messages.

Verifies that configuration errors carry their context, that failures render
the default messages, and that attempt errors combine them.
"""

import pytest

from calendardate.errors import (
    MESSAGES,
    CalendarDateValidationError,
    ConfigurationError,
    ErrorKind,
    InvalidComparisonArgumentError,
    InvalidDurationOptionError,
    InvalidFormatTemplateError,
    InvalidOptionError,
    ValidationFailure,
    render_message,
)
from calendardate.rules.models import DurationSpec, DurationUnit


class TestConfigurationErrors:
    """Test configuration error hierarchy."""

    @pytest.mark.parametrize("error_class", [
        InvalidFormatTemplateError,
        InvalidComparisonArgumentError,
        InvalidDurationOptionError,
        InvalidOptionError,
    ])
    def test_subclasses_configuration_error(self, error_class):
        """Should be catchable as ConfigurationError."""
        error = error_class("bad")

        assert isinstance(error, ConfigurationError)
        assert error.recoverable is False
        assert error.context == {}

    def test_carries_context(self):
        """Should keep the offending argument and context."""
        error = InvalidFormatTemplateError("Invalid format string: 'YY MM MM'",
                                           template="YY MM MM", context={"reason": "duplicate component"})

        assert error.template == "YY MM MM"
        assert error.context["reason"] == "duplicate component"
        assert str(error) == "Invalid format string: 'YY MM MM'"


class TestRenderMessage:
    """Test render_message function."""

    def test_every_code_has_a_template(self):
        """Should register a message for every failure code."""
        codes = {
            "base", "empty", "trim", "format", "parse", "eq", "ge", "gt", "le", "lt",
            "future", "past", "exact", "min", "max", "ref",
        }

        assert set(MESSAGES) == {f"calendardate.{code}" for code in codes}

    @pytest.mark.parametrize("code, details, expected", [
        ("calendardate.base", {}, "start must be a string"),
        ("calendardate.empty", {}, "start is not allowed to be empty"),
        ("calendardate.trim", {}, "start must not have leading or trailing whitespace"),
        ("calendardate.format", {"format": "DD/MM/YYYY"}, 'start must be a valid date in "DD/MM/YYYY" format'),
        ("calendardate.le", {"date": "2021-06-28"}, 'start must be less or equal to "2021-06-28"'),
        ("calendardate.ge", {"date": "2021-06-28"}, 'start must be greater or equal to "2021-06-28"'),
        ("calendardate.future", {"date": "2021-06-28"}, "start must be in the future"),
        ("calendardate.max", {"date": "2021-06-28", "duration": DurationSpec(1, DurationUnit.WEEK)},
         'start must be at most 1 week away from "2021-06-28"'),
        ("calendardate.ref", {"reference": "ref:contract.start"},
         'start references "ref:contract.start" which is not a valid calendar date'),
    ])
    def test_renders_templates(self, code, details, expected):
        """Should substitute the label and quote string values."""
        assert render_message(code, details, label="start") == expected

    def test_missing_details_stay_visible(self):
        """Should leave unknown placeholders in place."""
        assert render_message("calendardate.gt", {}) == "value must be greater than {date}"

    def test_unknown_code(self):
        """Should fall back to the bare code."""
        assert render_message("custom.code", {}) == "custom.code"


class TestValidationFailure:
    """Test ValidationFailure."""

    def test_message_includes_value(self):
        """Should expose the offending value to the template."""
        failure = ValidationFailure(kind=ErrorKind.CALLBACK_PARSE_FAILED,
                                    code="calendardate.parse", value="28 Juni")

        assert failure.message("birthday") == 'birthday with value "28 Juni" fails to be parsed by a callback'

    def test_is_immutable(self):
        """Should not allow fields to be reassigned."""
        failure = ValidationFailure(kind=ErrorKind.EMPTY_STRING, code="calendardate.empty", value="")

        with pytest.raises(AttributeError):
            failure.code = "calendardate.base"

    def test_kinds_are_strings(self):
        """Should serialize kinds as plain strings."""
        assert ErrorKind.DATE_DOES_NOT_MATCH_FORMAT == "date_does_not_match_format"


class TestCalendarDateValidationError:
    """Test CalendarDateValidationError."""

    def test_single_failure(self):
        """Should use the failure message as the exception message."""
        failure = ValidationFailure(kind=ErrorKind.NOT_A_STRING, code="calendardate.base", value=42)

        error = CalendarDateValidationError([failure], label="start", value=42)

        assert str(error) == "start must be a string"
        assert error.failure is failure
        assert error.value == 42

    def test_no_failures(self):
        """Should tolerate an empty failure list."""
        error = CalendarDateValidationError([])

        assert error.failure is None
        assert error.failures == ()
