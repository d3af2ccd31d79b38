"""Money-weighted return on monthly cashflows.

Contributions are negative amounts, the ending market value is a single
positive amount at the as-of month. The monthly rate that brings the net
present value to zero is found by bisection and compounded to a yearly
rate.
"""

import math
from collections.abc import Sequence

from src.domain.constants import (
    IRR_LOWER_BOUND,
    IRR_MAX_ITERATIONS,
    IRR_TOLERANCE,
    IRR_UPPER_BOUND,
    IRR_WIDENED_UPPER_BOUND,
)
from src.domain.models import Cashflow, PricedRow
from src.domain.services.periods import month_offset


def npv(rate: float, cashflows: Sequence[Cashflow]) -> float:
    """Return the net present value of monthly cashflows at rate.

    Args:
        rate: Monthly discount rate.
        cashflows: Cashflows with month offsets.

    Returns:
        float: Net present value; inf or NaN when the computation does
        not fit in a float.
    """
    total = 0.0
    for cashflow in cashflows:
        try:
            total += cashflow.amount / (1 + rate) ** cashflow.offset_months
        except OverflowError:
            return math.inf
        except ZeroDivisionError:
            return math.nan
    return total


def _has_both_signs(cashflows: Sequence[Cashflow]) -> bool:
    has_negative = any(cashflow.amount < 0 for cashflow in cashflows)
    has_positive = any(cashflow.amount > 0 for cashflow in cashflows)
    return has_negative and has_positive


def solve_monthly_rate(cashflows: Sequence[Cashflow]) -> float | None:
    """Find the monthly rate at which the cashflows' NPV is zero.

    The search brackets [-0.95, 10] and widens the upper bound to 50 once
    when the first bracket holds no sign change. At most 120 halvings are
    made, stopping early once abs(NPV) < 1e-8.

    Args:
        cashflows: At least two cashflows with both signs present.

    Returns:
        float | None: Monthly rate, or None when no root can be found.
    """
    if len(cashflows) < 2 or not _has_both_signs(cashflows):
        return None

    low, high = IRR_LOWER_BOUND, IRR_UPPER_BOUND
    f_low = npv(low, cashflows)
    f_high = npv(high, cashflows)
    if not math.isfinite(f_low) or not math.isfinite(f_high):
        return None
    if f_low * f_high > 0:
        high = IRR_WIDENED_UPPER_BOUND
        f_high = npv(high, cashflows)
        if not math.isfinite(f_high) or f_low * f_high > 0:
            return None

    for _ in range(IRR_MAX_ITERATIONS):
        mid = (low + high) / 2
        f_mid = npv(mid, cashflows)
        if not math.isfinite(f_mid):
            return None
        if abs(f_mid) < IRR_TOLERANCE:
            return mid
        if f_low * f_mid <= 0:
            high, f_high = mid, f_mid
        else:
            low, f_low = mid, f_mid
    return (low + high) / 2


def annualize_monthly_rate(rate: float) -> float:
    """Compound a monthly rate over twelve months."""
    return (1 + rate) ** 12 - 1


def solve_irr(cashflows: Sequence[Cashflow]) -> float | None:
    """Return the annualized money-weighted return, or None if unsolvable."""
    monthly = solve_monthly_rate(cashflows)
    if monthly is None:
        return None
    annual = annualize_monthly_rate(monthly)
    return annual if math.isfinite(annual) else None


def build_cashflows(
    rows: Sequence[PricedRow],
    as_of_month: str,
) -> list[Cashflow] | None:
    """Build the cashflow series for a set of priced lots.

    Each purchase month contributes the negative sum of its invested
    amounts. The ending value of all lots is added as one inflow at
    as_of_month. Offsets count months from the earliest purchase month.

    Args:
        rows: Priced lots of the selection.
        as_of_month: Valuation month in YYYY-MM form.

    Returns:
        list[Cashflow] | None: Cashflows ordered by offset, or None when
        no lot carries a month or as_of_month is not usable.
    """
    contributions: dict[str, float] = {}
    ending_value = 0.0
    for row in rows:
        ending_value += row.value
        if not row.month or row.invested == 0:
            continue
        contributions[row.month] = contributions.get(row.month, 0.0) - row.invested
    if not contributions:
        return None

    start = min(contributions)
    try:
        cashflows = [
            Cashflow(offset_months=month_offset(start, month), amount=amount)
            for month, amount in sorted(contributions.items())
        ]
        cashflows.append(
            Cashflow(
                offset_months=month_offset(start, as_of_month),
                amount=ending_value,
            )
        )
    except ValueError:
        return None
    return cashflows


__all__ = [
    "npv",
    "solve_monthly_rate",
    "annualize_monthly_rate",
    "solve_irr",
    "build_cashflows",
]
