"""Tests for infrastructure settings."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import DashboardSettings

_ENV_KEYS = (
    "PORTFOLIO_CSV",
    "PORTFOLIO_PRICES",
    "PORTFOLIO_DEFAULT_PERIOD",
    "PORTFOLIO_WEIGHT_BASIS",
    "PORTFOLIO_CONTRIBUTION_EPSILON",
)


@pytest.fixture
def fake_logger(monkeypatch) -> MagicMock:
    """Isolate settings from .env files and the log directory."""
    logger = MagicMock()
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    return logger


def test_from_env_uses_absolute_paths(
    monkeypatch,
    tmp_path: Path,
    fake_logger: MagicMock,
) -> None:
    """Absolute file paths should resolve to Path instances."""
    csv_path = tmp_path / "portfolio.csv"
    prices_path = tmp_path / "prices.json"
    csv_path.write_text("ticker,shares,total_cost\n", encoding="utf-8")
    prices_path.write_text("{}", encoding="utf-8")
    monkeypatch.setenv("PORTFOLIO_CSV", str(csv_path))
    monkeypatch.setenv("PORTFOLIO_PRICES", str(prices_path))

    settings = DashboardSettings.from_env()

    assert settings.transactions_path == csv_path.resolve()
    assert settings.prices_path == prices_path.resolve()
    fake_logger.warning.assert_not_called()


def test_from_env_defaults_relative_to_project_root(
    monkeypatch,
    tmp_path: Path,
    fake_logger: MagicMock,
) -> None:
    """Default paths sit under the project data directory."""
    monkeypatch.setattr(settings_module, "get_project_root", lambda: tmp_path)

    settings = DashboardSettings.from_env()

    assert settings.transactions_path == (tmp_path / "data/portfolio.csv").resolve()
    assert settings.prices_path == (tmp_path / "data/prices.json").resolve()
    assert settings.default_period == "YTD"
    assert settings.weight_basis == "selection"
    assert settings.contribution_epsilon == pytest.approx(1e-3)
    assert fake_logger.warning.call_count == 2


def test_from_env_reads_tuning_values(
    monkeypatch,
    fake_logger: MagicMock,
) -> None:
    """Period, weight basis and epsilon are normalized from the environment."""
    monkeypatch.setenv("PORTFOLIO_DEFAULT_PERIOD", " ltm ")
    monkeypatch.setenv("PORTFOLIO_WEIGHT_BASIS", "Portfolio")
    monkeypatch.setenv("PORTFOLIO_CONTRIBUTION_EPSILON", "0.01")

    settings = DashboardSettings.from_env()

    assert settings.default_period == "LTM"
    assert settings.weight_basis == "portfolio"
    assert settings.contribution_epsilon == pytest.approx(0.01)


@pytest.mark.parametrize(
    ("key", "value", "attribute", "expected"),
    [
        ("PORTFOLIO_DEFAULT_PERIOD", "decade", "default_period", "YTD"),
        ("PORTFOLIO_WEIGHT_BASIS", "market", "weight_basis", "selection"),
        ("PORTFOLIO_CONTRIBUTION_EPSILON", "abc", "contribution_epsilon", 1e-3),
        ("PORTFOLIO_CONTRIBUTION_EPSILON", "-1", "contribution_epsilon", 1e-3),
    ],
)
def test_from_env_falls_back_on_invalid_values(
    monkeypatch,
    tmp_path: Path,
    fake_logger: MagicMock,
    key: str,
    value: str,
    attribute: str,
    expected,
) -> None:
    """Invalid values keep the default and log a warning."""
    monkeypatch.setattr(settings_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setenv(key, value)

    settings = DashboardSettings.from_env()

    assert getattr(settings, attribute) == expected
    messages = [call.args[0] for call in fake_logger.warning.call_args_list]
    assert any(key in message for message in messages)
