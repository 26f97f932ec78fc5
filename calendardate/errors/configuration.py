"""
Configuration error classifications for schema building.

These exceptions are raised immediately by builder calls when a caller passes
an unusable argument. They are programmer errors and never describe the value
being validated.
"""

from typing import Any, Dict, Optional


class ConfigurationError(Exception):
    """Base class for errors raised while building a validation config."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class InvalidFormatTemplateError(ConfigurationError):
    """Format template is malformed or names a component twice."""

    def __init__(self, message: str, template: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.template = template


class InvalidComparisonArgumentError(ConfigurationError):
    """Comparison reference is neither a date, a keyword nor an ISO date string."""

    def __init__(self, message: str, argument: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.argument = argument


class InvalidDurationOptionError(ConfigurationError):
    """Duration options are malformed, conflicting or unsatisfiable."""

    def __init__(self, message: str, option: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.option = option
        self.value = value


class InvalidOptionError(ConfigurationError):
    """A builder flag received a value of the wrong type or outside its choices."""

    def __init__(self, message: str, option: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.option = option
        self.value = value
