"""Default configuration parameters for calendar date validation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FormatParams:
    """Date format parameters."""
    template: str = "YYYY-MM-DD"                     # Used when no format is configured
    two_digit_year_pivot: int = 68                   # YY above this maps to 19YY, else 20YY


@dataclass(frozen=True)
class ValidationParams:
    """Per-call validation behaviour."""
    trim: bool = False                               # Whitespace handling flag for new schemas
    convert: bool = True                             # Strip whitespace instead of rejecting it
    abort_early: bool = True                         # Stop at the first failing rule


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters for applications using configure_logging."""
    level: str = "WARNING"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    format: FormatParams
    validation: ValidationParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        format=FormatParams(),
        validation=ValidationParams(),
        logging=LoggingParams(),
    )


DEFAULTS = get_default_config()
