"""Domain models for raw portfolio inputs."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TransactionRecord:
    """One purchase lot read from the transactions file.

    Attributes:
        ticker: Trimmed ticker as written in the file.
        shares: Number of shares bought (NaN when unparseable).
        total_cost: Cost basis paid for the shares (NaN when unparseable).
        month: Bucketing month in YYYY-MM form, empty when unknown.
    """

    ticker: str
    shares: float
    total_cost: float
    month: str = ""


@dataclass(frozen=True)
class PriceSnapshot:
    """Current prices and the valuation date they refer to."""

    prices: Mapping[str, Any] = field(default_factory=dict)
    as_of: str = ""

    @property
    def as_of_month(self) -> str:
        """Return the YYYY-MM prefix of the as-of date."""
        return self.as_of.strip()[:7]


__all__ = ["TransactionRecord", "PriceSnapshot"]
