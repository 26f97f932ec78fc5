"""
Comparison rule evaluation.

Each rule first checks the ordering between the validated date and its
reference, then any duration bounds on the whole-unit distance between them.
A rule produces at most one failure.
"""

from typing import Any, Mapping, Optional, Sequence

from ..dates.models import CanonicalDate
from ..dates.normalizer import DateNormalizer, normalizer as default_normalizer
from ..errors import ErrorKind, ValidationFailure
from ..logging.config import get_logger, log_rule_decision
from ..utils.time import Clock
from .models import ComparisonRule, DurationSpec
from .units import calendar_unit_difference

logger = get_logger(__name__)


def duration_satisfied(constraint: str, spec: DurationSpec, distance: int) -> bool:
    """Check an absolute whole-unit distance against one named constraint."""
    if constraint == "exact":
        return distance == spec.quantity
    if constraint == "min":
        return distance >= spec.quantity
    return distance <= spec.quantity


class ComparisonEvaluator:
    """Evaluates comparison rules against canonical dates."""

    def __init__(self, normalizer: Optional[DateNormalizer] = None):
        self.normalizer = normalizer or default_normalizer

    def evaluate(self, value: CanonicalDate, rule: ComparisonRule, *,
                 context: Optional[Mapping[str, Any]] = None,
                 clock: Optional[Clock] = None) -> Optional[ValidationFailure]:
        """
        Evaluate one rule.

        Args:
            value: Validated canonical date
            rule: Rule to apply
            context: Mapping for external references
            clock: Clock for relative keywords

        Returns:
            None when the rule passes, otherwise the failure it produced
        """
        try:
            reference = self.normalizer.resolve(rule.reference, context, clock)
        except (KeyError, ValueError) as e:
            log_rule_decision(logger, rule.code, False, str(value), None,
                              context={"error": str(e)})
            return ValidationFailure(
                kind=ErrorKind.INVALID_REFERENCE,
                code="calendardate.ref",
                value=str(value),
                details={"reference": str(rule.reference), "rule": rule.code},
            )

        failure = self._check_ordering(value, reference, rule)
        if failure is None:
            failure = self._check_durations(value, reference, rule)

        log_rule_decision(logger, failure.code if failure else rule.code,
                          failure is None, str(value), str(reference))
        return failure

    def evaluate_all(self, value: CanonicalDate, rules: Sequence[ComparisonRule], *,
                     context: Optional[Mapping[str, Any]] = None,
                     clock: Optional[Clock] = None,
                     abort_early: bool = True) -> list[ValidationFailure]:
        """
        Evaluate rules in configuration order.

        Args:
            value: Validated canonical date
            rules: Rules to apply
            context: Mapping for external references
            clock: Clock for relative keywords
            abort_early: Stop at the first failing rule

        Returns:
            Failures in rule order, empty when every rule passed
        """
        failures = []
        for rule in rules:
            failure = self.evaluate(value, rule, context=context, clock=clock)
            if failure is None:
                continue
            failures.append(failure)
            if abort_early:
                break
        return failures

    def _check_ordering(self, value: CanonicalDate, reference: CanonicalDate,
                        rule: ComparisonRule) -> Optional[ValidationFailure]:
        diff = value.days_since(reference)
        if rule.operator.accepts(diff):
            return None
        return ValidationFailure(
            kind=ErrorKind.ORDERING_VIOLATION,
            code=rule.code,
            value=str(value),
            details={"date": str(reference), "operator": rule.operator.value},
        )

    def _check_durations(self, value: CanonicalDate, reference: CanonicalDate,
                         rule: ComparisonRule) -> Optional[ValidationFailure]:
        for constraint, spec in rule.constraints.items():
            distance = abs(calendar_unit_difference(value.day, reference.day, spec.unit))
            if duration_satisfied(constraint, spec, distance):
                continue
            return ValidationFailure(
                kind=ErrorKind.DURATION_VIOLATION,
                code=f"calendardate.{constraint}",
                value=str(value),
                details={
                    "date": str(reference),
                    "duration": spec,
                    "constraint": constraint,
                    "distance": distance,
                    "operator": rule.operator.value,
                },
            )
        return None
