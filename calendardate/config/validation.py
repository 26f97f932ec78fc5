"""Schema definition validation utilities."""

from dataclasses import dataclass
from datetime import date
from typing import Any

from ..casting import CastKind
from ..dates.models import CanonicalDate
from ..dates.normalizer import KEYWORDS
from ..dates.template import is_valid_template
from ..errors import InvalidDurationOptionError
from ..rules.duration import OPTION_KEYS, parse_duration_options

SCHEMA_KEYS = ("format", "trim", "rules", "cast")
REFERENCE_OPERATORS = ("eq", "ge", "gt", "le", "lt")
RELATIVE_OPERATORS = ("future", "past")


@dataclass(frozen=True)
class SchemaIssue:
    """Represents a problem in a declarative schema definition."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates declarative schema definitions before they are built."""

    @staticmethod
    def validate_reference(field: str, value: Any) -> list[SchemaIssue]:
        """Validate a comparison reference as written in a definition."""
        if isinstance(value, date):
            return []
        if isinstance(value, str) and (value in KEYWORDS or CanonicalDate.try_from_iso(value)):
            return []
        if isinstance(value, dict) and set(value) == {"ref"} and isinstance(value["ref"], str):
            return []
        return [SchemaIssue(
            field=field,
            message="Must be today, tomorrow, yesterday, a YYYY-MM-DD date or {ref: key}",
            value=value
        )]

    @staticmethod
    def validate_rule(index: int, rule: Any) -> list[SchemaIssue]:
        """Validate a single rule entry."""
        field = f"rules[{index}]"
        if not isinstance(rule, dict):
            return [SchemaIssue(field=field, message="Must be a mapping", value=rule)]

        errors = []
        operators = [key for key in rule if key in REFERENCE_OPERATORS + RELATIVE_OPERATORS]
        if len(operators) != 1:
            errors.append(SchemaIssue(
                field=field,
                message="Must name exactly one of eq, ge, gt, le, lt, future, past",
                value=rule
            ))
            return errors

        operator = operators[0]
        unknown = [key for key in rule if key != operator and key not in OPTION_KEYS]
        if unknown:
            errors.append(SchemaIssue(
                field=field,
                message=f"Unknown rule keys: {', '.join(map(str, unknown))}",
                value=rule
            ))

        if operator in REFERENCE_OPERATORS:
            errors.extend(ConfigValidator.validate_reference(f"{field}.{operator}", rule[operator]))
        elif rule[operator] is not True:
            errors.append(SchemaIssue(
                field=f"{field}.{operator}",
                message="Must be true",
                value=rule[operator]
            ))

        options = {key: rule[key] for key in OPTION_KEYS if key in rule}
        try:
            parse_duration_options(options)
        except InvalidDurationOptionError as e:
            errors.append(SchemaIssue(field=field, message=str(e), value=options))

        return errors

    @staticmethod
    def validate_schema_definition(definition: Any) -> list[SchemaIssue]:
        """Validate a complete schema definition."""
        if not isinstance(definition, dict):
            return [SchemaIssue(field="schema", message="Must be a mapping", value=definition)]

        errors = []

        unknown = [key for key in definition if key not in SCHEMA_KEYS]
        if unknown:
            errors.append(SchemaIssue(
                field="schema",
                message=f"Unknown keys: {', '.join(map(str, unknown))}",
                value=unknown
            ))

        # Validate format
        if definition.get("format") is not None:
            value = definition["format"]
            if not is_valid_template(value):
                errors.append(SchemaIssue(
                    field="format",
                    message="Must be a template of YYYY/YY, MM/M and DD/D tokens",
                    value=value
                ))

        # Validate trim
        if "trim" in definition:
            value = definition["trim"]
            if not isinstance(value, bool):
                errors.append(SchemaIssue(
                    field="trim",
                    message="Must be a boolean",
                    value=value
                ))

        # Validate cast
        if definition.get("cast") is not None:
            value = definition["cast"]
            if value not in [kind.value for kind in CastKind]:
                errors.append(SchemaIssue(
                    field="cast",
                    message=f"Must be one of {', '.join(kind.value for kind in CastKind)}",
                    value=value
                ))

        # Validate rules
        if "rules" in definition:
            rules = definition["rules"]
            if not isinstance(rules, list):
                errors.append(SchemaIssue(
                    field="rules",
                    message="Must be a list",
                    value=rules
                ))
            else:
                for index, rule in enumerate(rules):
                    errors.extend(ConfigValidator.validate_rule(index, rule))

        return errors
