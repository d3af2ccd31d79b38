"""Domain validation helpers."""

import math


def is_finite_number(value: object) -> bool:
    """Return True for finite real numbers.

    Booleans are rejected even though they subclass int.

    Args:
        value: Candidate value, typically from a decoded JSON payload.

    Returns:
        bool: True when value can be used in arithmetic.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_valid_lot(shares: float, total_cost: float) -> bool:
    """Return True when a lot carries usable quantities.

    Args:
        shares: Number of shares in the lot.
        total_cost: Cost basis of the lot.

    Returns:
        bool: True when shares is finite and positive and cost is finite.
    """
    if not is_finite_number(shares) or shares <= 0:
        return False
    return is_finite_number(total_cost)


__all__ = ["is_finite_number", "is_valid_lot"]
