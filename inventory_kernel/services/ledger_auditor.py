"""
LedgerAuditor -- replay validation of the transaction log.

Responsibility:
    Proves that the append-only log is a complete account of the registry:
    replaying every record from an empty registry must reproduce the live
    SKUs and their quantities exactly.

Architecture position:
    Kernel > Services -- read-only consumer of ``InventoryModel.snapshot()``.

Invariants verified:
    - Transaction ids are unique and their sequence strictly increases.
    - NEW_ITEM only for a SKU that is not live; every other kind only for a
      live SKU.
    - ADD_STOCK deltas are positive, REMOVE_STOCK deltas are negative.
    - The replayed running quantity never goes negative.
    - DELETE_ITEM removes exactly the running quantity.
    - Replayed quantities equal the registry's quantities.

Failure modes:
    - LedgerIntegrityError on the first violation found.
"""

from __future__ import annotations

from inventory_kernel.domain.dtos import TransactionKind, TransactionRecord
from inventory_kernel.exceptions import LedgerIntegrityError
from inventory_kernel.logging_config import get_logger
from inventory_kernel.services.inventory_model import InventoryModel

logger = get_logger("services.ledger_auditor")


class LedgerAuditor:
    """
    Validates a model's log against its registry.

    Contract:
        Takes one consistent snapshot per validation, so concurrent writers
        cannot produce a false alarm.

    Non-goals:
        - Does NOT repair anything; a broken ledger is reported, not fixed.
    """

    def __init__(self, model: InventoryModel):
        self._model = model

    def validate_log(self) -> bool:
        """
        Replay the log and compare it to the registry.

        Returns:
            True when every invariant holds.

        Raises:
            LedgerIntegrityError: At the first violation.
        """
        items, transactions = self._model.snapshot()
        try:
            replayed = self.replay(transactions)
            registry = {item.sku: item.quantity for item in items}
            if replayed != registry:
                missing = sorted(set(registry) - set(replayed))
                extra = sorted(set(replayed) - set(registry))
                drift = sorted(
                    sku
                    for sku in set(registry) & set(replayed)
                    if registry[sku] != replayed[sku]
                )
                raise LedgerIntegrityError(
                    None,
                    f"replay does not match registry "
                    f"(unlogged={missing}, orphaned={extra}, drifted={drift})",
                )
        except LedgerIntegrityError:
            logger.critical("ledger_replay_broken", exc_info=True)
            raise

        logger.info(
            "ledger_replay_valid",
            extra={"transaction_count": len(transactions), "item_count": len(items)},
        )
        return True

    @staticmethod
    def replay(transactions: list[TransactionRecord]) -> dict[str, int]:
        """
        Rebuild SKU -> quantity from a log, checking each step.

        Raises:
            LedgerIntegrityError: At the first inconsistent record.
        """
        quantities: dict[str, int] = {}
        seen_ids: set[str] = set()
        last_sequence = 0

        for record in transactions:
            txn = record.transaction_id
            if txn in seen_ids:
                raise LedgerIntegrityError(txn, "duplicate transaction id")
            seen_ids.add(txn)
            try:
                sequence = record.sequence
            except ValueError:
                raise LedgerIntegrityError(
                    txn, "transaction id has no numeric sequence"
                ) from None
            if sequence <= last_sequence:
                raise LedgerIntegrityError(
                    txn, f"sequence {sequence} does not follow {last_sequence}"
                )
            last_sequence = sequence

            live = record.sku in quantities
            delta = record.quantity_delta

            if record.kind == TransactionKind.NEW_ITEM:
                if live:
                    raise LedgerIntegrityError(txn, f"{record.sku} created while live")
                if delta < 0:
                    raise LedgerIntegrityError(txn, "new item with negative quantity")
                quantities[record.sku] = delta
                continue

            if not live:
                raise LedgerIntegrityError(
                    txn, f"{record.kind.value} on SKU {record.sku} that is not live"
                )
            if record.kind == TransactionKind.ADD_STOCK and delta <= 0:
                raise LedgerIntegrityError(txn, "ADD_STOCK with non-positive delta")
            if record.kind == TransactionKind.REMOVE_STOCK and delta >= 0:
                raise LedgerIntegrityError(txn, "REMOVE_STOCK with non-negative delta")

            running = quantities[record.sku] + delta
            if running < 0:
                raise LedgerIntegrityError(txn, f"{record.sku} would go to {running}")

            if record.kind == TransactionKind.DELETE_ITEM:
                if running != 0:
                    raise LedgerIntegrityError(
                        txn, f"delete left {running} units of {record.sku} unaccounted"
                    )
                del quantities[record.sku]
            else:
                quantities[record.sku] = running

        return quantities
