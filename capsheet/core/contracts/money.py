"""
Currency helpers shared by the contract calculations.

All amounts are in millions (e.g. 30.0 = $30M) and rounded to cents of a
million. Values coming from storage or request bodies can be missing or
malformed, so everything passes through the coercion helpers first.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any


CENTS = Decimal("0.01")


def as_amount(value: Any) -> float:
    """Coerce a value to a finite float. Anything unusable becomes 0.0."""
    if isinstance(value, bool):
        return float(value)
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return amount


def as_count(value: Any) -> int:
    """Coerce a value to an int (years, seasons). Anything unusable becomes 0."""
    return int(as_amount(value))


def round_currency(value: Any) -> float:
    """Round half-up to 2 decimal places."""
    amount = as_amount(value)
    # str() gives the shortest repr, so 2.675 rounds as written
    return float(Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP))
