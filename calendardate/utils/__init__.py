"""
Utility functions module.

Time Semantics:
- Every validated value is a whole calendar day, no time-of-day
- The wall clock is read through an injectable Clock, once per call
- Local midnight is the instant a calendar day maps to when cast
"""
