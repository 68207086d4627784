"""
Config -> Kernel Bridges.

Functions that turn ``LedgerSettings`` into kernel objects.  They live in
inventory_config (the producer) because the kernel must NEVER import
inventory_config.

Usage:
    from inventory_config import get_active_settings
    from inventory_config.bridges import build_inventory_model, configure_logging_from

    settings = get_active_settings()
    configure_logging_from(settings)
    model = build_inventory_model(settings)
"""

from __future__ import annotations

import logging

from inventory_config.schema import LedgerSettings
from inventory_kernel.domain.clock import Clock
from inventory_kernel.domain.dtos import Item, TransactionKind
from inventory_kernel.exceptions import InventoryKernelError
from inventory_kernel.logging_config import LogContext, configure_logging, get_logger
from inventory_kernel.services.inventory_model import InventoryModel

logger = get_logger("config.bridges")


class DemoSeedError(InventoryKernelError):
    """A configured demo item or adjustment was rejected by the ledger."""

    code: str = "DEMO_SEED_REJECTED"

    def __init__(self, sku: str, status: str):
        self.sku = sku
        self.status = status
        super().__init__(f"Demo seed rejected for {sku}: {status}")


def configure_logging_from(settings: LedgerSettings) -> None:
    """Apply the configured level to the inventory_kernel logger tree."""
    configure_logging(level=logging.getLevelName(settings.log_level))


def build_inventory_model(
    settings: LedgerSettings,
    clock: Clock | None = None,
) -> InventoryModel:
    """
    Construct an InventoryModel from settings, seeding demo data if enabled.

    Demo records are written through the public operations as
    ``settings.system_actor``, so they appear in the log like any other
    mutation.

    Raises:
        DemoSeedError: If a demo item or adjustment is rejected.
    """
    model = InventoryModel(
        clock=clock,
        transaction_id_prefix=settings.transaction_id_prefix,
        default_notes=settings.default_notes,
    )
    if settings.seed_demo_data:
        seed_demo_data(model, settings)
    return model


def seed_demo_data(model: InventoryModel, settings: LedgerSettings) -> None:
    """
    Create the configured demo items, then replay the demo adjustments.

    Every log line of one seed run carries the correlation id
    ``seed-<checksum prefix>``, tying it to the settings that produced it.
    """
    with LogContext.bind(correlation_id=f"seed-{settings.checksum[:12]}"):
        _seed(model, settings)


def _seed(model: InventoryModel, settings: LedgerSettings) -> None:
    actor = settings.system_actor
    for demo in settings.demo_items:
        item = Item(
            sku=demo.sku,
            name=demo.name,
            category=demo.category,
            quantity=demo.quantity,
            unit_price=demo.unit_price,
        )
        result = model.try_add_item(item, actor)
        if not result.is_success:
            raise DemoSeedError(demo.sku, result.status.value)

    for adjustment in settings.demo_adjustments:
        if adjustment.kind == TransactionKind.ADD_STOCK:
            result = model.try_add_stock(
                adjustment.sku, adjustment.quantity, actor, adjustment.note
            )
        else:
            result = model.try_remove_stock(
                adjustment.sku, adjustment.quantity, actor, adjustment.note
            )
        if not result.is_success:
            raise DemoSeedError(adjustment.sku, result.status.value)

    logger.info(
        "demo_data_seeded",
        extra={
            "item_count": len(settings.demo_items),
            "adjustment_count": len(settings.demo_adjustments),
        },
    )
