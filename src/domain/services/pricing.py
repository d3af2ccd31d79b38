"""Price lookup and per-lot valuation."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from logging import Logger
from typing import Any

from src.domain.models import PricedRow, TransactionRecord
from src.domain.services.normalization import normalize_ticker
from src.domain.services.validation import is_finite_number, is_valid_lot


@dataclass(frozen=True)
class PricingResult:
    """Priced lots plus the tickers that could not be priced."""

    rows: list[PricedRow] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def resolve_price(prices: Mapping[str, Any], ticker: str) -> float | None:
    """Return the usable price for a canonical ticker.

    Args:
        prices: Price map keyed by uppercase ticker.
        ticker: Canonical ticker.

    Returns:
        float | None: Price, or None when absent or not a finite number.
    """
    price = prices.get(ticker)
    if not is_finite_number(price):
        return None
    return float(price)


def value_lot(
    ticker: str,
    month: str,
    shares: float,
    total_cost: float,
    price: float,
) -> PricedRow:
    """Derive valuation figures for a validated lot."""
    value = shares * price
    gain = value - total_cost
    return PricedRow(
        ticker=ticker,
        month=month,
        shares=shares,
        avg_cost=total_cost / shares,
        price=price,
        invested=total_cost,
        value=value,
        gain=gain,
        gain_pct=0.0 if total_cost == 0 else gain / total_cost,
    )


def price_transaction(
    record: TransactionRecord,
    prices: Mapping[str, Any],
) -> PricedRow | None:
    """Value one transaction record against the price map.

    Args:
        record: Transaction to value.
        prices: Price map keyed by uppercase ticker.

    Returns:
        PricedRow | None: Valued lot, or None when the ticker is blank,
        unpriced, or the record carries invalid numbers.
    """
    ticker = normalize_ticker(record.ticker)
    if not ticker:
        return None
    price = resolve_price(prices, ticker)
    if price is None:
        return None
    if not is_valid_lot(record.shares, record.total_cost):
        return None
    return value_lot(
        ticker,
        record.month,
        record.shares,
        record.total_cost,
        price,
    )


def price_transactions(
    records: Iterable[TransactionRecord],
    prices: Mapping[str, Any],
    logger: Logger | None = None,
) -> PricingResult:
    """Value every record and collect the ones that cannot be priced.

    Records with a blank ticker are not rows and are skipped silently.
    Every other unpriceable record adds its ticker to the missing list,
    once per record.

    Args:
        records: Transactions to value, in display order.
        prices: Price map keyed by uppercase ticker.
        logger: Optional logger receiving one warning per pass.

    Returns:
        PricingResult: Priced lots and missing tickers in input order.
    """
    rows: list[PricedRow] = []
    missing: list[str] = []
    for record in records:
        ticker = normalize_ticker(record.ticker)
        if not ticker:
            continue
        row = price_transaction(record, prices)
        if row is None:
            missing.append(ticker)
            continue
        rows.append(row)
    if missing and logger is not None:
        logger.warning(f"Missing/invalid rows skipped: {missing}")
    return PricingResult(rows=rows, missing=missing)


__all__ = [
    "PricingResult",
    "resolve_price",
    "value_lot",
    "price_transaction",
    "price_transactions",
]
