"""Read-only selectors over the inventory ledger."""

from inventory_kernel.selectors.base import BaseSelector
from inventory_kernel.selectors.ledger_selector import CategoryTotal, LedgerSelector

__all__ = [
    "BaseSelector",
    "CategoryTotal",
    "LedgerSelector",
]
