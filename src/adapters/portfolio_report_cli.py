"""CLI adapter printing the performance KPIs of a period.

The period comes from ``REPORT_PERIOD`` and defaults to the configured
dashboard period.
"""

import os

from src.domain.errors import PortfolioLoadError, UnknownPeriodError
from src.domain.services.periods import describe_period
from src.infrastructure.container import (
    build_performance_dashboard_use_case,
    build_settings,
)
from src.infrastructure.logging.logger import get_app_logger


def _format_pct(value: float | None) -> str:
    if value is None:
        return "—"
    return f"{value * 100:.2f}%"


def main() -> None:
    """Run the performance use case and print a text report."""
    logger = get_app_logger()
    settings = build_settings()
    period_key = os.getenv("REPORT_PERIOD", settings.default_period)
    use_case = build_performance_dashboard_use_case(settings)

    try:
        result = use_case.execute(period_key)
    except (PortfolioLoadError, UnknownPeriodError) as exc:
        logger.error(str(exc))
        return

    totals = result.totals
    print(f"{describe_period(result.period)} (as of {result.as_of or '—'})")
    print(
        f"Invested={totals.invested:,.2f} Value={totals.value:,.2f} "
        f"Gain={totals.gain:,.2f} Return={_format_pct(totals.return_pct)} "
        f"IRR={_format_pct(result.irr)}"
    )
    print(
        f"Tickers={result.ticker_count} "
        f"Transactions={result.transaction_count} "
        f"Missing={len(result.missing)}"
    )
    for row in result.rows:
        print(
            f"{row.key:<8} invested={row.invested:,.2f} "
            f"value={row.value:,.2f} gain={_format_pct(row.gain_pct)} "
            f"contrib={_format_pct(row.contrib_pct)} "
            f"weight={_format_pct(row.weight)} txns={row.txns}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
