"""
Services -- the imperative shell around the pure domain.

InventoryModel is the single writer of inventory state; LedgerAuditor
replays its log to verify it.
"""

from inventory_kernel.services.inventory_model import (
    DEFAULT_NOTES,
    DEFAULT_TRANSACTION_ID_PREFIX,
    InventoryModel,
)
from inventory_kernel.services.ledger_auditor import LedgerAuditor

__all__ = [
    "DEFAULT_NOTES",
    "DEFAULT_TRANSACTION_ID_PREFIX",
    "InventoryModel",
    "LedgerAuditor",
]
