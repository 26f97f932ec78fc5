"""
Logging configuration and utilities for calendardate.
"""
from .config import configure_logging, get_logger, log_rule_decision

__all__ = ["configure_logging", "get_logger", "log_rule_decision"]
