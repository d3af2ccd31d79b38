"""File-backed adapter for the portfolio inputs."""

import json
from pathlib import Path

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.domain.errors import PortfolioLoadError
from src.domain.models import PriceSnapshot, TransactionRecord
from src.domain.services.records import parse_transactions_csv
from src.infrastructure.logging.logger import get_app_logger


class FilePortfolioSource(PortfolioSourcePort):
    """Read transactions from a CSV file and prices from a JSON file."""

    def __init__(
        self,
        transactions_path: Path | str,
        prices_path: Path | str,
        logger=None,
    ) -> None:
        """Initialize the adapter.

        Args:
            transactions_path: Path to the transactions CSV file.
            prices_path: Path to the prices JSON file.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transactions_path = Path(transactions_path)
        self._prices_path = Path(prices_path)
        self._logger = logger or get_app_logger()

    def load_transactions(self) -> list[TransactionRecord]:
        """Read and parse the transactions file.

        Returns:
            list[TransactionRecord]: Records in file order.

        Raises:
            PortfolioLoadError: If the file cannot be read or decoded.
        """
        text = self._read_text(self._transactions_path)
        records = parse_transactions_csv(text)
        self._logger.info(
            f"Loaded {len(records)} transactions from {self._transactions_path}"
        )
        return records

    def load_price_snapshot(self) -> PriceSnapshot:
        """Read and decode the prices file.

        Returns:
            PriceSnapshot: Prices keyed by uppercase ticker and the as-of date.

        Raises:
            PortfolioLoadError: If the file cannot be read, is not valid JSON,
                or does not hold an object with a prices mapping.
        """
        text = self._read_text(self._prices_path)
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PortfolioLoadError(
                f"Invalid JSON in {self._prices_path}: {exc}"
            ) from exc
        if not isinstance(payload, dict):
            raise PortfolioLoadError(
                f"Prices file {self._prices_path} must hold a JSON object"
            )
        prices = payload.get("prices") or {}
        if not isinstance(prices, dict):
            raise PortfolioLoadError(
                f"'prices' in {self._prices_path} must be an object"
            )
        as_of = payload.get("asOf") or ""
        self._logger.info(
            f"Loaded {len(prices)} prices as of {as_of or 'unknown'}"
        )
        return PriceSnapshot(prices=dict(prices), as_of=str(as_of))

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self._logger.error(f"Failed to read {path}: {exc}")
            raise PortfolioLoadError(f"Failed to load {path}: {exc}") from exc


__all__ = ["FilePortfolioSource"]
