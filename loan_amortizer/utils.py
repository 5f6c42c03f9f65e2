"""Utility functions for the loan amortizer.

This module converts user input (strings from the command line or a web form,
numbers from JSON) into ``Decimal`` values and checks them against the domains
the calculator accepts.
"""

from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation, Overflow
from typing import Any

from .data_models import MAX_YEARS_DURATION
from .errors import InvalidInput

# Intermediate arithmetic runs with 28 significant digits.
CALCULATION_CONTEXT = Context(prec=28)

# Stored amounts keep 15 significant digits within the normal range of a
# double, so a JSON number carries them without loss.
STORAGE_CONTEXT = Context(prec=15, Emin=-290, Emax=290)


def to_stored(value: Decimal) -> Decimal:
    """Round ``value`` to the precision amounts are stored with.

    Raises ``decimal.Overflow`` when the value is outside the storable range.
    """
    return STORAGE_CONTEXT.plus(value)


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and surrounding whitespace. It raises
    ``InvalidInput`` if conversion fails.
    """
    try:
        cleaned = value.strip().replace(",", "")
        result = Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise InvalidInput(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise InvalidInput(f"Invalid numeric value: {value}")
    return result


def parse_amount(value: str) -> Decimal:
    """Parse an amount with optional shorthand suffixes.

    Accepts plain numbers ("165000", "165,000.50") and ``k``/``m`` suffixes
    (e.g. "165k" meaning 165_000).
    """
    text = value.strip().lower()
    factor = Decimal(1)
    if text.endswith("k"):
        factor = Decimal(1_000)
        text = text[:-1]
    elif text.endswith("m"):
        factor = Decimal(1_000_000)
        text = text[:-1]
    return decimal_from_str(text) * factor


def to_decimal(value: Any, name: str) -> Decimal:
    """Coerce ``value`` into a finite ``Decimal``.

    Floats go through their shortest ``str`` form so that ``4.3`` becomes
    ``Decimal("4.3")`` rather than its binary expansion. The result is rounded
    with ``STORAGE_CONTEXT``; values beyond its range are rejected.
    """
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        result = decimal_from_str(value)
    else:
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    if not result.is_finite():
        raise InvalidInput(f"{name} must be finite, got {value!r}")
    try:
        return to_stored(result)
    except Overflow as exc:
        raise InvalidInput(f"{name} is too large, got {value!r}") from exc


def validate_amount(value: Any, name: str) -> Decimal:
    """Return ``value`` as a non-negative ``Decimal``."""
    amount = to_decimal(value, name)
    if amount < 0:
        raise InvalidInput(f"{name} must not be negative, got {amount}")
    return amount


def validate_years(value: Any) -> int:
    """Return ``value`` as a loan term between 0 and ``MAX_YEARS_DURATION``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"years_duration must be an integer, got {value!r}")
    if not 0 <= value <= MAX_YEARS_DURATION:
        raise InvalidInput(
            f"years_duration must be between 0 and {MAX_YEARS_DURATION}, got {value}"
        )
    return value
