"""Tests for comparison rule evaluation."""

from unittest.mock import patch

import pytest

from calendardate.dates.models import CanonicalDate
from calendardate.errors import ErrorKind
from calendardate.rules.evaluator import ComparisonEvaluator, duration_satisfied
from calendardate.rules.models import ComparisonOperator, DurationSpec, DurationUnit, Reference
from calendardate.schema import build_rule


def day(text: str) -> CanonicalDate:
    return CanonicalDate.from_iso(text)


@pytest.fixture
def evaluator():
    return ComparisonEvaluator()


class TestOrdering:
    """Test ordering checks."""

    @pytest.mark.parametrize("operator, value, passes", [
        ("eq", "2021-06-28", True),
        ("eq", "2021-06-29", False),
        ("ge", "2021-06-28", True),
        ("ge", "2021-06-27", False),
        ("gt", "2021-06-29", True),
        ("gt", "2021-06-28", False),
        ("le", "2021-06-28", True),
        ("le", "2021-06-29", False),
        ("lt", "2021-06-27", True),
        ("lt", "2021-06-28", False),
    ])
    def test_operators(self, evaluator, operator, value, passes):
        """Should compare whole calendar days."""
        rule = build_rule(operator, "2021-06-28")

        failure = evaluator.evaluate(day(value), rule)

        assert (failure is None) is passes

    def test_failure_details(self, evaluator):
        """Should report the rule code and the resolved reference."""
        failure = evaluator.evaluate(day("2021-06-28"), build_rule("gt", "2021-06-28"))

        assert failure.kind == ErrorKind.ORDERING_VIOLATION
        assert failure.code == "calendardate.gt"
        assert failure.value == "2021-06-28"
        assert failure.details["date"] == "2021-06-28"
        assert failure.message() == 'value must be greater than "2021-06-28"'

    def test_custom_code(self, evaluator, fixed_clock):
        """Should use the code the rule was built with."""
        rule = build_rule("lt", "today", code="calendardate.past")

        failure = evaluator.evaluate(day("2021-06-28"), rule, clock=fixed_clock)

        assert failure.code == "calendardate.past"
        assert failure.message() == "value must be in the past"

    def test_keyword_uses_clock(self, evaluator, fixed_clock):
        """Should resolve keywords against the supplied clock."""
        rule = build_rule("eq", "tomorrow")

        assert evaluator.evaluate(day("2021-06-29"), rule, clock=fixed_clock) is None


class TestDurations:
    """Test duration constraints."""

    def test_ordering_failure_skips_durations(self, evaluator):
        """Should report ordering before checking durations."""
        rule = build_rule("gt", "2021-06-28", {"min": "4 years"})

        failure = evaluator.evaluate(day("2021-06-01"), rule)

        assert failure.kind == ErrorKind.ORDERING_VIOLATION

    def test_min_violation(self, evaluator):
        """Should reject a distance shorter than min."""
        rule = build_rule("gt", "2021-06-28", {"min": "4 years"})

        failure = evaluator.evaluate(day("2025-06-27"), rule)

        assert failure.kind == ErrorKind.DURATION_VIOLATION
        assert failure.code == "calendardate.min"
        assert failure.details["distance"] == 3
        assert failure.message() == 'value must be at least 4 years away from "2021-06-28"'

    def test_min_satisfied(self, evaluator):
        """Should accept a distance of at least min."""
        rule = build_rule("gt", "2021-06-28", {"min": "4 years"})

        assert evaluator.evaluate(day("2025-06-30"), rule) is None

    def test_exact(self, evaluator):
        """Should require the exact whole-unit distance."""
        rule = build_rule("lt", "2021-09-01", {"exact": "2 months"})

        assert evaluator.evaluate(day("2021-06-28"), rule) is None

        failure = evaluator.evaluate(day("2021-07-02"), rule)
        assert failure.code == "calendardate.exact"
        assert failure.details["duration"] == DurationSpec(2, DurationUnit.MONTH)

    def test_max(self, evaluator):
        """Should reject a distance longer than max."""
        rule = build_rule("ge", "2021-06-28", {"max": "10 days"})

        assert evaluator.evaluate(day("2021-07-08"), rule) is None
        assert evaluator.evaluate(day("2021-07-09"), rule).code == "calendardate.max"

    def test_constraint_order(self, evaluator):
        """Should check min before max."""
        rule = build_rule("ge", "2021-06-28", {"min": "1 week", "max": "2 weeks"})

        assert evaluator.evaluate(day("2021-06-30"), rule).code == "calendardate.min"
        assert evaluator.evaluate(day("2021-07-20"), rule).code == "calendardate.max"


class TestReferences:
    """Test external reference resolution."""

    def test_resolves_from_context(self, evaluator):
        """Should compare against the value found in the context."""
        rule = build_rule("gt", Reference("start"))

        assert evaluator.evaluate(day("2021-07-01"), rule, context={"start": "2021-06-28"}) is None

    def test_missing_reference(self, evaluator):
        """Should report an invalid reference when the key is absent."""
        rule = build_rule("gt", Reference("start"))

        failure = evaluator.evaluate(day("2021-07-01"), rule, context={})

        assert failure.kind == ErrorKind.INVALID_REFERENCE
        assert failure.code == "calendardate.ref"
        assert failure.details == {"reference": "ref:start", "rule": "calendardate.gt"}

    def test_unusable_reference(self, evaluator):
        """Should report an invalid reference when the value is not a date."""
        rule = build_rule("gt", Reference("start"))

        failure = evaluator.evaluate(day("2021-07-01"), rule, context={"start": [2021, 6, 28]})

        assert failure.kind == ErrorKind.INVALID_REFERENCE


class TestEvaluateAll:
    """Test ComparisonEvaluator.evaluate_all."""

    @pytest.fixture
    def rules(self):
        return [
            build_rule("gt", "2021-07-01"),
            build_rule("lt", "2021-01-01"),
            build_rule("eq", "2021-06-28"),
        ]

    def test_abort_early(self, evaluator, rules):
        """Should stop at the first failing rule."""
        failures = evaluator.evaluate_all(day("2021-06-29"), rules)

        assert [failure.code for failure in failures] == ["calendardate.gt"]

    def test_collect_all(self, evaluator, rules):
        """Should collect every failure in rule order."""
        failures = evaluator.evaluate_all(day("2021-06-29"), rules, abort_early=False)

        assert [failure.code for failure in failures] == [
            "calendardate.gt", "calendardate.lt", "calendardate.eq"
        ]

    def test_logs_each_decision(self, evaluator, rules):
        """Should log the outcome of every evaluated rule."""
        with patch("calendardate.rules.evaluator.log_rule_decision") as mock_log:
            evaluator.evaluate_all(day("2021-06-28"), rules[2:])

        mock_log.assert_called_once()
        args = mock_log.call_args[0]
        assert args[1:5] == ("calendardate.eq", True, "2021-06-28", "2021-06-28")


class TestDurationSatisfied:
    """Test duration_satisfied function."""

    def test_bounds_are_inclusive(self):
        """Should treat min and max as inclusive."""
        spec = DurationSpec(2, DurationUnit.DAY)

        assert duration_satisfied("min", spec, 2)
        assert duration_satisfied("max", spec, 2)
        assert duration_satisfied("exact", spec, 2)
        assert not duration_satisfied("exact", spec, 3)


class TestComparisonOperator:
    """Test ComparisonOperator.accepts."""

    def test_rejects_unknown_operator(self):
        """Should only accept the five operators."""
        with pytest.raises(ValueError):
            ComparisonOperator("ne")
