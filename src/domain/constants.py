"""Domain constants for portfolio analytics."""

PERIOD_KEYS = ("MTD", "QTD", "YTD", "LM", "LQ", "LTM", "SI")

PERIOD_LABELS = {
    "MTD": "Month-to-Date",
    "QTD": "Quarter-to-Date",
    "YTD": "Year-to-Date",
    "LM": "Last Month",
    "LQ": "Last Quarter",
    "LTM": "Last 12 Months",
    "SI": "Since Inception",
}

ALL_MONTHS = "ALL"

WEIGHT_BASIS_SELECTION = "selection"
WEIGHT_BASIS_PORTFOLIO = "portfolio"
WEIGHT_BASES = (WEIGHT_BASIS_SELECTION, WEIGHT_BASIS_PORTFOLIO)

DEFAULT_CONTRIBUTION_EPSILON = 1e-3

IRR_LOWER_BOUND = -0.95
IRR_UPPER_BOUND = 10.0
IRR_WIDENED_UPPER_BOUND = 50.0
IRR_MAX_ITERATIONS = 120
IRR_TOLERANCE = 1e-8


__all__ = [
    "PERIOD_KEYS",
    "PERIOD_LABELS",
    "ALL_MONTHS",
    "WEIGHT_BASIS_SELECTION",
    "WEIGHT_BASIS_PORTFOLIO",
    "WEIGHT_BASES",
    "DEFAULT_CONTRIBUTION_EPSILON",
    "IRR_LOWER_BOUND",
    "IRR_UPPER_BOUND",
    "IRR_WIDENED_UPPER_BOUND",
    "IRR_MAX_ITERATIONS",
    "IRR_TOLERANCE",
]
