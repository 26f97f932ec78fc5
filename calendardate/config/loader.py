"""Schema loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from ..logging.config import get_logger
from ..rules.models import Reference
from ..schema import CalendarDateSchema, calendardate
from .defaults import DefaultConfig, get_default_config
from .validation import REFERENCE_OPERATORS, ConfigValidator

logger = get_logger(__name__)

SCHEMAS_FILE = "schemas.yaml"


def _reference_value(value: Any) -> Any:
    if isinstance(value, dict) and "ref" in value:
        return Reference(value["ref"])
    return value


def build_schema_from_definition(definition: dict[str, Any]) -> CalendarDateSchema:
    """
    Build a schema from a declarative definition.

    The definition is not validated here; see ConfigValidator.

    Args:
        definition: Mapping with optional format, trim, rules and cast keys

    Returns:
        CalendarDateSchema
    """
    schema = calendardate()

    if definition.get("format") is not None:
        schema = schema.format(definition["format"])

    if "trim" in definition:
        schema = schema.trim(definition["trim"])

    for rule in definition.get("rules") or []:
        options = {key: rule[key] for key in ("exact", "min", "max") if key in rule}
        if "future" in rule:
            schema = schema.future(options or None)
        elif "past" in rule:
            schema = schema.past(options or None)
        else:
            operator = next(key for key in REFERENCE_OPERATORS if key in rule)
            method = getattr(schema, operator)
            schema = method(_reference_value(rule[operator]), options or None)

    if definition.get("cast") is not None:
        schema = schema.cast(definition["cast"])

    return schema


@dataclass(frozen=True)
class ConfigLoader:
    """Manages schema loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path.cwd() / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_schema_definitions(self) -> dict[str, Any]:
        """Load all named schema definitions from schemas.yaml."""
        schemas_file = self.config_dir / SCHEMAS_FILE

        if not schemas_file.exists():
            return {}

        with open(schemas_file) as f:
            document = yaml.safe_load(f) or {}

        return document.get("schemas", {}) or {}  # type: ignore[no-any-return]

    def load_schema_definition(self, name: str) -> dict[str, Any]:
        """Load one named schema definition, empty when absent."""
        definition = self.load_schema_definitions().get(name)
        if definition is None:
            logger.debug("Schema not found, using defaults", schema=name,
                         config_dir=str(self.config_dir))
            return {}
        return definition  # type: ignore[no-any-return]

    def merge_definition(
        self,
        name: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge a schema definition with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Named definition from schemas.yaml
        3. Global defaults (lowest priority)
        """
        definition = {
            "format": self.defaults.format.template,
            "trim": self.defaults.validation.trim,
            "rules": [],
            "cast": None,
        }

        definition = self._deep_merge(definition, self.load_schema_definition(name))

        if overrides:
            definition = self._deep_merge(definition, overrides)

        return definition

    def build_schema(
        self,
        name: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> CalendarDateSchema:
        """
        Build a named schema.

        Raises:
            ConfigurationError: If the merged definition is invalid
        """
        definition = self.merge_definition(name, overrides)

        issues = ConfigValidator.validate_schema_definition(definition)
        if issues:
            messages = [f"{issue.field}: {issue.message} (got: {issue.value})" for issue in issues]
            raise ConfigurationError(
                f"Invalid schema definition '{name}': {'; '.join(messages)}",
                context={"schema": name, "issues": issues},
            )

        return build_schema_from_definition(definition)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries; lists are replaced, not concatenated."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
