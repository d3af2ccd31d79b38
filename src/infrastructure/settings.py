"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path

import dotenv

from src.domain.constants import (
    DEFAULT_CONTRIBUTION_EPSILON,
    PERIOD_KEYS,
    WEIGHT_BASES,
    WEIGHT_BASIS_SELECTION,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


@dataclass(frozen=True)
class DashboardSettings:
    """Settings for locating the inputs and tuning the calculations.

    Attributes:
        transactions_path: Path to the transactions CSV file.
        prices_path: Path to the prices JSON file.
        default_period: Period selected when the dashboard opens.
        weight_basis: "selection" or "portfolio" weighting of holdings.
        contribution_epsilon: Overall return below which contribution
            shares are left undefined.
    """

    transactions_path: Path
    prices_path: Path
    default_period: str = "YTD"
    weight_basis: str = WEIGHT_BASIS_SELECTION
    contribution_epsilon: float = DEFAULT_CONTRIBUTION_EPSILON

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """Build settings from environment variables and ``.env``.

        Returns:
            DashboardSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        transactions_path = cls._resolve_path(
            os.getenv("PORTFOLIO_CSV", "data/portfolio.csv"),
            logger=logger,
        )
        prices_path = cls._resolve_path(
            os.getenv("PORTFOLIO_PRICES", "data/prices.json"),
            logger=logger,
        )
        default_period = (
            os.getenv("PORTFOLIO_DEFAULT_PERIOD", "YTD").strip().upper()
        )
        if default_period not in PERIOD_KEYS:
            logger.warning(
                f"Unknown PORTFOLIO_DEFAULT_PERIOD={default_period}, using YTD"
            )
            default_period = "YTD"
        weight_basis = (
            os.getenv("PORTFOLIO_WEIGHT_BASIS", WEIGHT_BASIS_SELECTION)
            .strip()
            .lower()
        )
        if weight_basis not in WEIGHT_BASES:
            logger.warning(
                f"Unknown PORTFOLIO_WEIGHT_BASIS={weight_basis}, "
                f"using {WEIGHT_BASIS_SELECTION}"
            )
            weight_basis = WEIGHT_BASIS_SELECTION
        return cls(
            transactions_path=transactions_path,
            prices_path=prices_path,
            default_period=default_period,
            weight_basis=weight_basis,
            contribution_epsilon=cls._parse_epsilon(
                os.getenv("PORTFOLIO_CONTRIBUTION_EPSILON"),
                logger=logger,
            ),
        )

    @staticmethod
    def _resolve_path(raw_path: str, logger) -> Path:
        """Resolve a path relative to the project root.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Absolute path to the file.
        """
        path = Path(raw_path).expanduser()
        if not path.is_absolute():
            path = get_project_root() / path
        path = path.resolve()
        if not path.exists():
            logger.warning(f"Portfolio input does not exist at {path}")
        return path

    @staticmethod
    def _parse_epsilon(raw_value: str | None, logger) -> float:
        """Parse the contribution epsilon, keeping the default on bad input.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            float: Non-negative epsilon.
        """
        if not raw_value:
            return DEFAULT_CONTRIBUTION_EPSILON
        try:
            value = float(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid PORTFOLIO_CONTRIBUTION_EPSILON={raw_value}"
            )
            return DEFAULT_CONTRIBUTION_EPSILON
        if value < 0:
            logger.warning(
                f"Negative PORTFOLIO_CONTRIBUTION_EPSILON={raw_value}"
            )
            return DEFAULT_CONTRIBUTION_EPSILON
        return value


__all__ = ["DashboardSettings"]
