"""
LedgerSettings schema.

The human-authored, reviewable source of ledger configuration.  YAML files
are parsed into these types by the loader and turned into a live model by
the bridges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from inventory_kernel.domain.dtos import TransactionKind


@dataclass(frozen=True)
class DemoItemDef:
    """An item created when demo data is seeded."""

    sku: str
    name: str
    category: str
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class DemoAdjustmentDef:
    """A stock adjustment replayed after the demo items are created."""

    sku: str
    kind: TransactionKind  # ADD_STOCK or REMOVE_STOCK
    quantity: int
    note: str = ""


@dataclass(frozen=True)
class LedgerSettings:
    """Complete ledger configuration."""

    transaction_id_prefix: str = "TXN"
    system_actor: str = "system"
    log_level: str = "INFO"
    default_notes: dict[TransactionKind, str] = field(default_factory=dict)
    seed_demo_data: bool = False
    demo_items: tuple[DemoItemDef, ...] = ()
    demo_adjustments: tuple[DemoAdjustmentDef, ...] = ()
    checksum: str = ""
