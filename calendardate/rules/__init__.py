"""
Comparison rules module.

Duration parsing, whole calendar-unit differences, and evaluation of ordering
and duration constraints between a validated date and its reference.
"""
