"""
Inventory Kernel

An in-memory, append-only inventory ledger with:
- Unique SKU registry
- Non-negative stock quantities
- One immutable transaction record per accepted mutation
- Atomic operations under a single lock
"""

__version__ = "0.1.0"
