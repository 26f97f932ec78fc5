"""
Centralized logging configuration for calendardate.

Library modules obtain loggers through get_logger and only emit DEBUG
records. Applications opt into output by calling configure_logging once
at startup; until then records go through stdlib logging at its WARNING default.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger, Processor

from ..config.defaults import DEFAULTS, LoggingParams


def _processors(*tail: Processor) -> list[Processor]:
    """Processor chain shared by both configurations, ending with ``tail``."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        *tail,
    ]


def configure_logging(params: Optional[LoggingParams] = None) -> None:
    """
    Configure structlog for an application embedding calendardate.

    Args:
        params: Level and output format, DEFAULTS.logging when omitted

    Raises:
        ValueError: If the level is not a stdlib logging level name
    """
    params = params or DEFAULTS.logging
    level = logging.getLevelName(params.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: '{params.level}'")

    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s")

    if params.format_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=_processors(structlog.processors.TimeStamper(fmt="iso"), renderer),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _configure_stdlib_routing() -> None:
    """Route structlog through stdlib logging so its level filtering applies."""
    structlog.configure(
        processors=_processors(structlog.dev.ConsoleRenderer(colors=False)),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structlog logger instance.

    If the application has not configured structlog yet, records are routed
    through stdlib logging, whose default WARNING level hides DEBUG output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog logger instance
    """
    if not structlog.is_configured():
        _configure_stdlib_routing()
    return structlog.get_logger(name)


def log_rule_decision(
    logger: FilteringBoundLogger,
    rule_code: str,
    passed: bool,
    value: str,
    reference: Optional[str],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a comparison rule outcome with standardized fields.

    Args:
        logger: structlog logger instance
        rule_code: Failure code of the rule, e.g. calendardate.gt
        passed: Whether the rule accepted the value
        value: Canonical date under validation
        reference: Canonical reference date, None if it could not be resolved
        context: Additional context data
    """
    bound_logger = logger.bind(
        subsystem="calendardate",
        rule=rule_code,
        rule_result="PASS" if passed else "FAIL",
        value=value,
        reference=reference,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if passed:
        bound_logger.debug("Comparison rule passed")
    else:
        bound_logger.debug("Comparison rule failed")
