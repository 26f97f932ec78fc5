"""
Configuration module.

Defaults live in ``defaults``; declarative schemas are read from YAML by
``loader`` and checked by ``validation`` before they are built.
"""
