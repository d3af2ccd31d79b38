"""Domain error types."""


class UnknownPeriodError(ValueError):
    """Raised when a period key is not one of the supported keys."""


class InvalidWeightBasisError(ValueError):
    """Raised when a weight basis is neither selection nor portfolio."""


class PortfolioLoadError(RuntimeError):
    """Raised when the transactions or prices input cannot be loaded."""


__all__ = [
    "UnknownPeriodError",
    "InvalidWeightBasisError",
    "PortfolioLoadError",
]
