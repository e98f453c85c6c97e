"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from pathlib import Path

import pytest

from exactmoney.core import config as config_module
from exactmoney.core.currency import Currency, CurrencyRegistry


@pytest.fixture
def iso_registry() -> CurrencyRegistry:
    """Packaged ISO 4217 registry."""
    return CurrencyRegistry.iso()


@pytest.fixture
def custom_currency() -> Currency:
    """Non-ISO currency with three fraction digits."""
    return Currency("CUSTOM", 0, "Custom currency", 3)


@pytest.fixture
def currency_file(tmp_path) -> Path:
    """YAML file defining two extra currencies."""
    path = tmp_path / "currencies.yaml"
    path.write_text(
        "currencies:\n"
        "  - code: XBT\n"
        "    numeric_code: 0\n"
        "    name: Bitcoin\n"
        "    fraction_digits: 8\n"
        "  - code: LOY\n"
        "    name: Loyalty Points\n"
        "    fraction_digits: 0\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("EXACTMONEY_ENV", "test")
    monkeypatch.setenv("EXACTMONEY_LOCALE", "en_US")
    monkeypatch.delenv("EXACTMONEY_CURRENCY_FILE", raising=False)
    monkeypatch.delenv("EXACTMONEY_DEFAULT_ROUNDING", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    # Every test starts without a cached configuration
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for money arithmetic, rounding and allocation"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end command-line tests"
    )
