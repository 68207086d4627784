"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Defines the immutable data structures that flow in and out of the
    inventory ledger: Item (registry value), TransactionRecord (audit log
    entry), MutationResult (outcome of a mutating call) and InventorySummary
    (consistent aggregate snapshot for reporting).

Architecture position:
    Kernel > Domain -- pure, zero I/O, no locking.

Invariants enforced:
    - Item.quantity is a non-negative int.
    - Item.unit_price is a non-negative Decimal (never float).
    - Item.sku is a non-empty string.
    - Every DTO is a frozen dataclass; stock changes produce a new Item.

Failure modes:
    - ValueError on Item construction with an invalid field.  This is a
      programming error at the call site, not a ledger rejection.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum


class TransactionKind(str, Enum):
    """
    Kind of mutation recorded in the transaction log.

    Contract:
        Closed enumeration; one kind per mutating operation.
    """

    NEW_ITEM = "NEW_ITEM"
    UPDATE_ITEM = "UPDATE_ITEM"
    DELETE_ITEM = "DELETE_ITEM"
    ADD_STOCK = "ADD_STOCK"
    REMOVE_STOCK = "REMOVE_STOCK"


class MutationStatus(str, Enum):
    """Outcome of a mutating ledger call."""

    APPLIED = "applied"
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    INSUFFICIENT_QUANTITY = "insufficient_quantity"
    INVALID_AMOUNT = "invalid_amount"


@dataclass(frozen=True)
class Item:
    """
    A stock-keeping unit in the registry.

    Contract:
        Immutable value object, replaced wholesale on update.  The SKU is the
        identity and never changes for a live registry entry.

    Guarantees:
        - quantity >= 0 and is an int (bool rejected)
        - unit_price >= 0 and is a Decimal
    """

    sku: str
    name: str
    category: str
    quantity: int
    unit_price: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.sku, str) or not self.sku:
            raise ValueError("Item sku must be a non-empty string")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(
                f"Item quantity must be an int, got {type(self.quantity).__name__}"
            )
        if self.quantity < 0:
            raise ValueError(f"Item quantity cannot be negative: {self.quantity}")
        if not isinstance(self.unit_price, Decimal):
            raise ValueError(
                f"Item unit_price must be a Decimal, got {type(self.unit_price).__name__}"
            )
        if not self.unit_price.is_finite() or self.unit_price < 0:
            raise ValueError(f"Item unit_price must be non-negative: {self.unit_price}")

    @classmethod
    def of(
        cls,
        sku: str,
        name: str,
        category: str,
        quantity: int,
        unit_price: Decimal | str | int,
    ) -> Item:
        """
        Create an Item, coercing ``unit_price`` to Decimal.

        Floats are refused: ``Decimal(0.1)`` carries binary noise into the
        ledger's value totals.
        """
        if isinstance(unit_price, float):
            raise ValueError("Item unit_price cannot be a float; pass a str or Decimal")
        try:
            price = Decimal(unit_price)
        except InvalidOperation as exc:
            raise ValueError(f"Item unit_price is not a number: {unit_price!r}") from exc
        return cls(
            sku=sku,
            name=name,
            category=category,
            quantity=quantity,
            unit_price=price,
        )

    @property
    def value(self) -> Decimal:
        """Stock value of this line: quantity x unit_price."""
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> Item:
        """Return a copy with a different on-hand quantity."""
        return replace(self, quantity=quantity)


@dataclass(frozen=True)
class TransactionRecord:
    """
    One immutable entry of the transaction log.

    Contract:
        Created once by the ledger after the mutation is applied.  Never
        mutated or deleted.  ``item_name`` is a snapshot taken at mutation
        time and does not follow later renames.
    """

    transaction_id: str
    created_at: datetime
    sku: str
    item_name: str
    kind: TransactionKind
    quantity_delta: int
    actor: str
    note: str

    @property
    def sequence(self) -> int:
        """Numeric position encoded in the transaction id (``TXN-7`` -> 7)."""
        return int(self.transaction_id.rsplit("-", 1)[-1])


@dataclass(frozen=True)
class MutationResult:
    """Result of a mutating ledger call."""

    status: MutationStatus
    sku: str
    record: TransactionRecord | None = None
    message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == MutationStatus.APPLIED


@dataclass(frozen=True)
class InventorySummary:
    """
    Aggregate figures for the reporting collaborator.

    All fields come from the same critical section, so the counts and the
    value always describe one registry state.
    """

    generated_at: datetime
    item_count: int
    total_units: int
    total_value: Decimal
