"""
LedgerSelector -- queries over items and the transaction log.

Every query works on a fresh snapshot, so each answer reflects one
consistent ledger state.  Nothing here is stored: per-category figures and
per-SKU net deltas are derived on demand.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from inventory_kernel.domain.dtos import Item, TransactionKind, TransactionRecord
from inventory_kernel.selectors.base import BaseSelector


@dataclass(frozen=True)
class CategoryTotal:
    """Stock held in one category."""

    category: str
    item_count: int
    total_units: int
    total_value: Decimal


class LedgerSelector(BaseSelector):
    """Read-only views of a model's registry and log."""

    def transactions_for_sku(self, sku: str) -> list[TransactionRecord]:
        """All records for a SKU, including those from before a delete."""
        return [t for t in self.model.list_transactions() if t.sku == sku]

    def transactions_of_kind(self, kind: TransactionKind) -> list[TransactionRecord]:
        return [t for t in self.model.list_transactions() if t.kind == kind]

    def transactions_by_actor(self, actor: str) -> list[TransactionRecord]:
        return [t for t in self.model.list_transactions() if t.actor == actor]

    def transactions_between(
        self, start: datetime, end: datetime
    ) -> list[TransactionRecord]:
        """Records with ``start <= created_at < end``."""
        return [
            t for t in self.model.list_transactions() if start <= t.created_at < end
        ]

    def net_delta(self, sku: str) -> int:
        """Sum of quantity deltas recorded for a SKU."""
        return sum(t.quantity_delta for t in self.transactions_for_sku(sku))

    def items_in_category(self, category: str) -> list[Item]:
        return [i for i in self.model.list_items() if i.category == category]

    def category_totals(self) -> list[CategoryTotal]:
        """Per-category counts, units and value, sorted by category."""
        grouped: dict[str, list[Item]] = {}
        for item in self.model.list_items():
            grouped.setdefault(item.category, []).append(item)

        return [
            CategoryTotal(
                category=category,
                item_count=len(items),
                total_units=sum(i.quantity for i in items),
                total_value=sum((i.value for i in items), Decimal("0")),
            )
            for category, items in sorted(grouped.items())
        ]
