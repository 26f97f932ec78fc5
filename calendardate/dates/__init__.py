"""
Date format module.

Compiles format templates, strictly parses raw strings into canonical dates,
and normalizes reference values for comparison rules.
"""
