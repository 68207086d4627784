"""
InventoryModel -- in-memory item registry plus append-only transaction log.

Responsibility:
    Owns the SKU registry and the transaction log as one consistent unit.
    Every accepted mutation is applied to the registry and then recorded as
    exactly one ``TransactionRecord``.  Rejected mutations change nothing.

Architecture position:
    Kernel > Services -- the only writer of inventory state.  Selectors and
    the auditor read through its snapshot methods; the presentation layer
    calls the operations below and re-reads snapshots afterwards.

Invariants enforced:
    - SKU uniqueness: at most one live item per SKU.
    - Non-negative stock: a removal larger than the on-hand quantity is
      rejected before any mutation.
    - Log completeness: one record per accepted mutation, appended after the
      registry change, carrying the exact quantity delta.
    - ID monotonicity: ``<prefix>-<n+1>`` where n is the log length at append
      time, so ids are unique and strictly increasing in log order.
    - Append-only: no code path edits or removes a log entry.

Failure modes:
    - Expected rejections (DUPLICATE_KEY, NOT_FOUND, INSUFFICIENT_QUANTITY,
      INVALID_AMOUNT) are returned as ``MutationResult`` statuses, and the
      boolean operations return False.  Nothing is raised for them.

Audit relevance:
    The log is the sole audit trail.  ``LedgerAuditor`` replays it against
    the registry to prove the invariants above.
"""

from __future__ import annotations

import threading
from datetime import datetime
from decimal import Decimal

from inventory_kernel.domain.clock import Clock, SystemClock
from inventory_kernel.domain.dtos import (
    InventorySummary,
    Item,
    MutationResult,
    MutationStatus,
    TransactionKind,
    TransactionRecord,
)
from inventory_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.inventory_model")

DEFAULT_TRANSACTION_ID_PREFIX = "TXN"

DEFAULT_NOTES: dict[TransactionKind, str] = {
    TransactionKind.NEW_ITEM: "Created item",
    TransactionKind.UPDATE_ITEM: "Updated item details",
    TransactionKind.DELETE_ITEM: "Deleted item",
}


class InventoryModel:
    """
    Thread-safe inventory ledger.

    Contract:
        Accepts full ``Item`` records and stock adjustments, keyed by SKU.
        Each public call runs in a single critical section guarded by one
        re-entrant lock that covers both the registry and the log, so
        check-then-act sequences are atomic and readers never observe a
        half-applied mutation.

    Guarantees:
        - A ``False`` / non-APPLIED outcome means state is unchanged.
        - ``list_items`` and ``list_transactions`` return copies; later
          mutations never show through them.
        - Items are immutable, so snapshot elements cannot be altered either.

    Non-goals:
        - No authorization: ``actor`` is an opaque audit label.
        - No persistence and no multi-operation transactions.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        transaction_id_prefix: str = DEFAULT_TRANSACTION_ID_PREFIX,
        default_notes: dict[TransactionKind, str] | None = None,
    ):
        """
        Initialize an empty ledger.

        Args:
            clock: Clock for record timestamps. Defaults to SystemClock.
            transaction_id_prefix: Prefix of generated transaction ids.
            default_notes: Notes used when a caller supplies none, per kind.
        """
        if not transaction_id_prefix:
            raise ValueError("transaction_id_prefix must be non-empty")
        self._clock = clock or SystemClock()
        self._prefix = transaction_id_prefix
        self._default_notes = {**DEFAULT_NOTES, **(default_notes or {})}
        self._items: dict[str, Item] = {}
        self._transactions: list[TransactionRecord] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def find_by_sku(self, sku: str) -> Item | None:
        """Return the live item for ``sku``, or None."""
        with self._lock:
            return self._items.get(sku)

    def list_items(self) -> list[Item]:
        """Snapshot of all live items in registry insertion order."""
        with self._lock:
            return list(self._items.values())

    def list_transactions(self) -> list[TransactionRecord]:
        """Snapshot of the transaction log in append order."""
        with self._lock:
            return list(self._transactions)

    def snapshot(self) -> tuple[list[Item], list[TransactionRecord]]:
        """Items and log copied inside one critical section."""
        with self._lock:
            return list(self._items.values()), list(self._transactions)

    def total_inventory_value(self) -> Decimal:
        """Sum of quantity x unit_price over all live items."""
        with self._lock:
            return sum((item.value for item in self._items.values()), Decimal("0"))

    def total_units(self) -> int:
        """Sum of quantities over all live items."""
        with self._lock:
            return sum(item.quantity for item in self._items.values())

    def now(self) -> datetime:
        """Current time from the injected clock."""
        return self._clock.now()

    def summary(self) -> InventorySummary:
        """Item count, units and value for one consistent registry state."""
        with self._lock:
            items = list(self._items.values())
            generated_at = self._clock.now()
        return InventorySummary(
            generated_at=generated_at,
            item_count=len(items),
            total_units=sum(item.quantity for item in items),
            total_value=sum((item.value for item in items), Decimal("0")),
        )

    # ------------------------------------------------------------------
    # Write side: result-returning operations
    # ------------------------------------------------------------------

    def try_add_item(
        self, item: Item, actor: str, note: str | None = None
    ) -> MutationResult:
        """Insert a new SKU. Rejected with DUPLICATE_KEY if it is live."""
        with LogContext.bind(actor_id=actor, sku=item.sku):
            with self._lock:
                if item.sku in self._items:
                    result = MutationResult(
                        status=MutationStatus.DUPLICATE_KEY,
                        sku=item.sku,
                        message=f"Item with SKU {item.sku} already exists",
                    )
                else:
                    self._items[item.sku] = item
                    record = self._append(
                        item, TransactionKind.NEW_ITEM, item.quantity, actor, note
                    )
                    result = MutationResult(MutationStatus.APPLIED, item.sku, record)
            return self._report(result)

    def try_update_item(
        self, item: Item, actor: str, note: str | None = None
    ) -> MutationResult:
        """Replace the stored record for a live SKU wholesale."""
        with LogContext.bind(actor_id=actor, sku=item.sku):
            with self._lock:
                existing = self._items.get(item.sku)
                if existing is None:
                    result = self._not_found(item.sku)
                else:
                    delta = item.quantity - existing.quantity
                    self._items[item.sku] = item
                    record = self._append(
                        item, TransactionKind.UPDATE_ITEM, delta, actor, note
                    )
                    result = MutationResult(MutationStatus.APPLIED, item.sku, record)
            return self._report(result)

    def try_delete_item(
        self, sku: str, actor: str, note: str | None = None
    ) -> MutationResult:
        """Remove a live SKU; its history stays in the log."""
        with LogContext.bind(actor_id=actor, sku=sku):
            with self._lock:
                removed = self._items.pop(sku, None)
                if removed is None:
                    result = self._not_found(sku)
                else:
                    record = self._append(
                        removed,
                        TransactionKind.DELETE_ITEM,
                        -removed.quantity,
                        actor,
                        note,
                    )
                    result = MutationResult(MutationStatus.APPLIED, sku, record)
            return self._report(result)

    def try_add_stock(
        self, sku: str, qty: int, actor: str, note: str = ""
    ) -> MutationResult:
        """Increase on-hand quantity by a positive ``qty``."""
        with LogContext.bind(actor_id=actor, sku=sku):
            with self._lock:
                result = self._check_amount(sku, qty)
                if result is None:
                    existing = self._items.get(sku)
                    if existing is None:
                        result = self._not_found(sku)
                    else:
                        updated = existing.with_quantity(existing.quantity + qty)
                        self._items[sku] = updated
                        record = self._append(
                            updated, TransactionKind.ADD_STOCK, qty, actor, note
                        )
                        result = MutationResult(MutationStatus.APPLIED, sku, record)
            return self._report(result)

    def try_remove_stock(
        self, sku: str, qty: int, actor: str, note: str = ""
    ) -> MutationResult:
        """Decrease on-hand quantity; never below zero."""
        with LogContext.bind(actor_id=actor, sku=sku):
            with self._lock:
                result = self._check_amount(sku, qty)
                if result is None:
                    existing = self._items.get(sku)
                    if existing is None:
                        result = self._not_found(sku)
                    elif qty > existing.quantity:
                        result = MutationResult(
                            status=MutationStatus.INSUFFICIENT_QUANTITY,
                            sku=sku,
                            message=(
                                f"Cannot remove {qty} units of {sku}: "
                                f"only {existing.quantity} on hand"
                            ),
                        )
                    else:
                        updated = existing.with_quantity(existing.quantity - qty)
                        self._items[sku] = updated
                        record = self._append(
                            updated, TransactionKind.REMOVE_STOCK, -qty, actor, note
                        )
                        result = MutationResult(MutationStatus.APPLIED, sku, record)
            return self._report(result)

    # ------------------------------------------------------------------
    # Write side: boolean operations
    # ------------------------------------------------------------------

    def add_item(self, item: Item, actor: str, note: str | None = None) -> bool:
        return self.try_add_item(item, actor, note).is_success

    def update_item(self, item: Item, actor: str, note: str | None = None) -> bool:
        return self.try_update_item(item, actor, note).is_success

    def delete_item(self, sku: str, actor: str, note: str | None = None) -> bool:
        return self.try_delete_item(sku, actor, note).is_success

    def add_stock(self, sku: str, qty: int, actor: str, note: str = "") -> bool:
        return self.try_add_stock(sku, qty, actor, note).is_success

    def remove_stock(self, sku: str, qty: int, actor: str, note: str = "") -> bool:
        return self.try_remove_stock(sku, qty, actor, note).is_success

    # ------------------------------------------------------------------
    # Internals (callers hold self._lock)
    # ------------------------------------------------------------------

    def _next_transaction_id(self) -> str:
        return f"{self._prefix}-{len(self._transactions) + 1}"

    def _append(
        self,
        item: Item,
        kind: TransactionKind,
        delta: int,
        actor: str,
        note: str | None,
    ) -> TransactionRecord:
        record = TransactionRecord(
            transaction_id=self._next_transaction_id(),
            created_at=self._clock.now(),
            sku=item.sku,
            item_name=item.name,
            kind=kind,
            quantity_delta=delta,
            actor=actor,
            note=note if note is not None else self._default_notes.get(kind, ""),
        )
        self._transactions.append(record)
        return record

    @staticmethod
    def _check_amount(sku: str, qty: int) -> MutationResult | None:
        if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0:
            return MutationResult(
                status=MutationStatus.INVALID_AMOUNT,
                sku=sku,
                message=f"Stock adjustment must be a positive whole number, got {qty!r}",
            )
        return None

    @staticmethod
    def _not_found(sku: str) -> MutationResult:
        return MutationResult(
            status=MutationStatus.NOT_FOUND,
            sku=sku,
            message=f"Item not found: {sku}",
        )

    @staticmethod
    def _report(result: MutationResult) -> MutationResult:
        if result.record is not None:
            record = result.record
            with LogContext.bind(transaction_id=record.transaction_id):
                logger.info(
                    "inventory_mutation_applied",
                    extra={
                        "kind": record.kind.value,
                        "quantity_delta": record.quantity_delta,
                    },
                )
        else:
            logger.info(
                "inventory_mutation_rejected",
                extra={"status": result.status.value, "reason": result.message},
            )
        return result
