"""Application ports package."""

from .portfolio_source import PortfolioSourcePort

__all__ = ["PortfolioSourcePort"]
