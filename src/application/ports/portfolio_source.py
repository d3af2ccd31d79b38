"""Port for loading the portfolio inputs.

Use cases depend on this protocol; infrastructure adapters decide where
the transactions and prices come from.
"""

from typing import Protocol

from src.domain.models import PriceSnapshot, TransactionRecord


class PortfolioSourcePort(Protocol):
    """Port exposing the transactions and the current price snapshot."""

    def load_transactions(self) -> list[TransactionRecord]:
        """Return all transaction records in file order.

        Raises:
            PortfolioLoadError: If the transactions cannot be read.
        """

    def load_price_snapshot(self) -> PriceSnapshot:
        """Return the current prices and their as-of date.

        Raises:
            PortfolioLoadError: If the prices cannot be read.
        """


__all__ = ["PortfolioSourcePort"]
