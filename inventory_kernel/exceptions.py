"""
Typed exception hierarchy for the inventory kernel.

Expected ledger rejections (duplicate SKU, missing SKU, insufficient stock,
non-positive adjustment) are NOT exceptions.  They are reported as a
``MutationStatus`` on a ``MutationResult`` and the boolean operations return
False.  The classes here are reserved for faults a caller cannot treat as
normal control flow.

Every exception has a ``code`` class attribute (machine-readable, API-safe)
and carries its context as attributes rather than only in the message.

    InventoryKernelError (base)
    |
    +-- AuditError
        +-- LedgerIntegrityError

Code                     | When Raised
-------------------------|------------------------------------------------
LEDGER_INTEGRITY_BROKEN  | Transaction log does not replay to the registry
"""


class InventoryKernelError(Exception):
    """
    Base exception for all inventory kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "INVENTORY_KERNEL_ERROR"


class AuditError(InventoryKernelError):
    """Base exception for audit trail errors."""

    code: str = "AUDIT_ERROR"


class LedgerIntegrityError(AuditError):
    """
    The transaction log is inconsistent with itself or with the registry.

    The log is the sole audit trail; this is never a recoverable
    business outcome and should be investigated.
    """

    code: str = "LEDGER_INTEGRITY_BROKEN"

    def __init__(self, transaction_id: str | None, reason: str):
        self.transaction_id = transaction_id
        self.reason = reason
        where = transaction_id or "<registry>"
        super().__init__(f"Ledger integrity broken at {where}: {reason}")
