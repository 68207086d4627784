"""
Pure domain layer.

This module contains pure data transfer objects and the clock abstraction
with NO dependencies on:
- Locking
- The service layer
- Configuration
- I/O

All domain objects are immutable.
"""

from inventory_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from inventory_kernel.domain.dtos import (
    InventorySummary,
    Item,
    MutationResult,
    MutationStatus,
    TransactionKind,
    TransactionRecord,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "InventorySummary",
    "Item",
    "MutationResult",
    "MutationStatus",
    "SystemClock",
    "TransactionKind",
    "TransactionRecord",
]
