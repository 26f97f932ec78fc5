#!/usr/bin/env python3
"""
Basic Usage Example - calendardate

This script demonstrates the basic usage of calendardate. It shows how to:
- Build schemas with formats, trimming and comparison rules
- Read validation results and failure messages
- Use attempt() for exception-style validation
- Resolve references from a validation context
- Cast validated dates

Run: python examples/basic_usage.py
"""

from datetime import datetime

from calendardate import CalendarDateValidationError, Reference, calendardate
from calendardate.logging.config import configure_logging
from calendardate.utils.time import FixedClock

# Pin "today" so the output is reproducible
CLOCK = FixedClock(datetime(2021, 6, 28, 9, 0))


def demonstrate_formats():
    """Show strict parsing in several formats."""
    print("📅 FORMATS")
    print("=" * 50)

    samples = [
        ("YYYY-MM-DD", "2021-06-28"),
        ("DD/MM/YYYY", "28/06/2021"),
        ("M/D/YY", "6/28/21"),
        ("DD-MM-YYYY", "2021-06-28"),
        ("YYYY-MM-DD", "2021-02-29"),
        ("MM/YYYY", "02/2021"),
    ]

    for template, raw in samples:
        result = calendardate().format(template).validate(raw, clock=CLOCK)
        if result.ok:
            print(f"   {template:<12} {raw!r:<14} -> {result.value}")
        else:
            print(f"   {template:<12} {raw!r:<14} ❌ {result.error.message()}")

    print()


def demonstrate_rules():
    """Show ordering and duration rules."""
    print("⚖️ COMPARISON RULES")
    print("=" * 50)

    adult = calendardate().format("DD.MM.YYYY").trim().past({"min": "18 years"})
    for raw in [" 01.01.1990 ", "29.06.2003", "01.07.2021"]:
        result = adult.validate(raw, clock=CLOCK)
        status = "✅" if result.ok else f"❌ {result.error.message('birthday')}"
        print(f"   birthday {raw!r:<14} {status}")

    quarter_end = calendardate().lt("2021-09-01", {"exact": "2 months"})
    for raw in ["2021-06-28", "2021-07-02"]:
        result = quarter_end.validate(raw)
        status = "✅" if result.ok else f"❌ {result.error.message()}"
        print(f"   deadline {raw!r:<14} {status}")

    window = calendardate().gt("2021-07-01").lt("2021-01-01")
    result = window.validate("2021-06-28", abort_early=False)
    print(f"   collected {len(result.errors)} failures: {[error.code for error in result.errors]}")

    print()


def demonstrate_attempt_and_references():
    """Show attempt() and external references."""
    print("🔗 ATTEMPT AND REFERENCES")
    print("=" * 50)

    renewal = calendardate().gt(Reference("contract.start"), {"min": "1 year"})
    context = {"contract": {"start": "2021-06-28"}}

    print(f"   renewal: {renewal.attempt('2022-07-01', context=context)}")

    try:
        renewal.attempt("2022-01-15", context=context, label="renewal")
    except CalendarDateValidationError as e:
        print(f"   ❌ {e} ({e.failure.kind.value})")

    print()


def demonstrate_casts():
    """Show derived values."""
    print("🔁 CASTS")
    print("=" * 50)

    for kind in ["date", "number", "days", "weeks", "months", "quarters", "years"]:
        value = calendardate().cast(kind).validate("2020-01-15", clock=CLOCK).value
        print(f"   {kind:<9} {value!r}")

    print()


def main():
    configure_logging()

    demonstrate_formats()
    demonstrate_rules()
    demonstrate_attempt_and_references()
    demonstrate_casts()


if __name__ == "__main__":
    main()
