"""Pytest configuration and fixtures for checkout API tests.

Provides the reference price list (A-D) as raw data, as a pricing file and
as a loaded catalog, plus an in-memory rules stub.
"""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from checkoutapi.config import reset_config
from checkoutapi.pricing import FilePricingSource, PricingCatalog
from tests.helpers import REFERENCE_RULES, StubPricer, write_pricing_file


@pytest.fixture
def reference_rules() -> dict[str, dict]:
    """Raw reference price list."""
    return copy.deepcopy(REFERENCE_RULES)


@pytest.fixture
def pricer(reference_rules) -> StubPricer:
    """In-memory rules provider with the reference price list."""
    return StubPricer(reference_rules)


@pytest.fixture
def pricing_file(tmp_path: Path, reference_rules) -> Path:
    """Reference price list written to a JSON file."""
    return write_pricing_file(tmp_path / "pricing.json", reference_rules)


@pytest.fixture
def catalog(pricing_file: Path) -> PricingCatalog:
    """Catalog loaded from the reference pricing file."""
    return PricingCatalog(FilePricingSource(pricing_file))


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, pricing_file):
    """Set up test environment variables."""
    monkeypatch.setenv("PRICING_FILE", str(pricing_file))
    monkeypatch.setenv("PRICING_WATCH_ENABLED", "false")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    reset_config()
    yield
    reset_config()
