"""
Pytest fixtures for the inventory kernel test suite.

Provides:
- A deterministic clock
- Empty and demo-seeded ledgers
- Common item builders
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from inventory_config import get_active_settings
from inventory_config.bridges import build_inventory_model
from inventory_kernel.domain.clock import DeterministicClock
from inventory_kernel.domain.dtos import Item
from inventory_kernel.logging_config import LogContext, reset_logging
from inventory_kernel.services.inventory_model import InventoryModel


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "concurrency: mark test as spawning multiple threads"
    )


@pytest.fixture(autouse=True)
def _clean_logging():
    """Keep logger configuration and context from leaking between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def model(clock) -> InventoryModel:
    """An empty ledger on a deterministic clock."""
    return InventoryModel(clock=clock)


@pytest.fixture
def seeded_model(clock) -> InventoryModel:
    """A ledger built from the packaged default settings (demo data on)."""
    return build_inventory_model(get_active_settings(), clock=clock)


@pytest.fixture
def widget() -> Item:
    return _make_item("SKU-1", quantity=10, unit_price="5.00")


@pytest.fixture
def make_item():
    """Factory fixture for Items with sensible defaults."""
    return _make_item


def _make_item(
    sku: str,
    name: str = "Widget",
    category: str = "Tools",
    quantity: int = 0,
    unit_price: Decimal | str = "1.00",
) -> Item:
    """Build an Item with sensible defaults."""
    return Item.of(sku, name, category, quantity, unit_price)
