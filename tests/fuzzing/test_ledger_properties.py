"""
Hypothesis-based property tests for the inventory ledger.

Properties checked over generated operation sequences:
- Uniqueness: no two live items share a SKU; duplicate adds change nothing
- Non-negativity: every reachable quantity is >= 0
- Log completeness: log length grows by exactly one per accepted call,
  and each record's delta equals the quantity change it caused
- Snapshot isolation: earlier list_items results never change
- Aggregate consistency: totals equal sums over list_items
"""

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.stateful import (
    Bundle,
    RuleBasedStateMachine,
    invariant,
    rule,
)

from inventory_kernel.domain.clock import DeterministicClock
from inventory_kernel.domain.dtos import Item, MutationStatus, TransactionKind
from inventory_kernel.services.inventory_model import InventoryModel
from inventory_kernel.services.ledger_auditor import LedgerAuditor

SKUS = st.sampled_from([f"SKU-{n}" for n in range(6)])
QUANTITIES = st.integers(min_value=0, max_value=500)
ADJUSTMENTS = st.integers(min_value=-5, max_value=200)
PRICES = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("99999.99"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)


@st.composite
def items(draw):
    return Item(
        sku=draw(SKUS),
        name=draw(st.text(min_size=1, max_size=12)),
        category=draw(st.sampled_from(["Tools", "Peripherals", "Accessories"])),
        quantity=draw(QUANTITIES),
        unit_price=draw(PRICES),
    )


class LedgerStateMachine(RuleBasedStateMachine):
    """Drives InventoryModel against a plain dict reference."""

    snapshots = Bundle("snapshots")

    def __init__(self):
        super().__init__()
        self.model = InventoryModel(clock=DeterministicClock())
        self.reference: dict[str, Item] = {}
        self.log_length = 0

    def _expect(self, result, applied: bool, kind: TransactionKind | None = None, delta: int = 0):
        assert result.is_success is applied
        if applied:
            self.log_length += 1
            assert result.record.kind == kind
            assert result.record.quantity_delta == delta
            assert result.record.transaction_id == f"TXN-{self.log_length}"
        else:
            assert result.record is None

    @rule(item=items())
    def add_item(self, item):
        existed = item.sku in self.reference
        result = self.model.try_add_item(item, "fuzz")
        if existed:
            assert result.status == MutationStatus.DUPLICATE_KEY
        else:
            self.reference[item.sku] = item
        self._expect(result, not existed, TransactionKind.NEW_ITEM, item.quantity)

    @rule(item=items())
    def update_item(self, item):
        old = self.reference.get(item.sku)
        result = self.model.try_update_item(item, "fuzz")
        if old is None:
            assert result.status == MutationStatus.NOT_FOUND
            self._expect(result, False)
        else:
            self.reference[item.sku] = item
            self._expect(result, True, TransactionKind.UPDATE_ITEM, item.quantity - old.quantity)

    @rule(sku=SKUS)
    def delete_item(self, sku):
        old = self.reference.pop(sku, None)
        result = self.model.try_delete_item(sku, "fuzz")
        if old is None:
            self._expect(result, False)
        else:
            self._expect(result, True, TransactionKind.DELETE_ITEM, -old.quantity)

    @rule(sku=SKUS, qty=ADJUSTMENTS)
    def add_stock(self, sku, qty):
        old = self.reference.get(sku)
        result = self.model.try_add_stock(sku, qty, "fuzz")
        if qty <= 0:
            assert result.status == MutationStatus.INVALID_AMOUNT
            self._expect(result, False)
        elif old is None:
            assert result.status == MutationStatus.NOT_FOUND
            self._expect(result, False)
        else:
            self.reference[sku] = old.with_quantity(old.quantity + qty)
            self._expect(result, True, TransactionKind.ADD_STOCK, qty)

    @rule(sku=SKUS, qty=ADJUSTMENTS)
    def remove_stock(self, sku, qty):
        old = self.reference.get(sku)
        result = self.model.try_remove_stock(sku, qty, "fuzz")
        if qty <= 0:
            assert result.status == MutationStatus.INVALID_AMOUNT
            self._expect(result, False)
        elif old is None:
            assert result.status == MutationStatus.NOT_FOUND
            self._expect(result, False)
        elif qty > old.quantity:
            assert result.status == MutationStatus.INSUFFICIENT_QUANTITY
            self._expect(result, False)
        else:
            self.reference[sku] = old.with_quantity(old.quantity - qty)
            self._expect(result, True, TransactionKind.REMOVE_STOCK, -qty)

    @rule(target=snapshots)
    def take_snapshot(self):
        listed = self.model.list_items()
        return (listed, list(listed))

    @rule(snap=snapshots)
    def snapshot_unchanged(self, snap):
        listed, frozen_copy = snap
        assert listed == frozen_copy

    @invariant()
    def registry_matches_reference(self):
        assert {i.sku: i for i in self.model.list_items()} == self.reference

    @invariant()
    def skus_unique_and_non_negative(self):
        listed = self.model.list_items()
        assert len({i.sku for i in listed}) == len(listed)
        assert all(i.quantity >= 0 for i in listed)

    @invariant()
    def log_length_tracks_accepted_calls(self):
        assert len(self.model.list_transactions()) == self.log_length

    @invariant()
    def aggregates_consistent(self):
        listed = self.model.list_items()
        assert self.model.total_units() == sum(i.quantity for i in listed)
        assert self.model.total_inventory_value() == sum(
            (i.quantity * i.unit_price for i in listed), Decimal("0")
        )

    @invariant()
    def log_replays_to_registry(self):
        assert LedgerAuditor(self.model).validate_log() is True


TestLedgerStateMachine = LedgerStateMachine.TestCase
TestLedgerStateMachine.settings = settings(max_examples=60, stateful_step_count=40, deadline=None)


class TestDuplicateAddProperty:
    @given(first=items(), second=items())
    @settings(max_examples=100, deadline=None)
    def test_second_add_of_same_sku_is_rejected(self, first, second):
        model = InventoryModel(clock=DeterministicClock())
        second = Item(first.sku, second.name, second.category, second.quantity, second.unit_price)

        assert model.add_item(first, "fuzz") is True
        before = (model.list_items(), model.list_transactions(), model.total_inventory_value())
        assert model.add_item(second, "fuzz") is False
        after = (model.list_items(), model.list_transactions(), model.total_inventory_value())

        assert before == after


class TestRemovalProperty:
    @given(start=QUANTITIES, qty=st.integers(min_value=1, max_value=1000))
    @settings(max_examples=200, deadline=None)
    def test_removal_beyond_stock_mutates_nothing(self, start, qty):
        model = InventoryModel(clock=DeterministicClock())
        model.add_item(Item("SKU-1", "Widget", "Tools", start, Decimal("1")), "fuzz")

        ok = model.remove_stock("SKU-1", qty, "fuzz")

        assert ok is (qty <= start)
        expected = start - qty if ok else start
        assert model.find_by_sku("SKU-1").quantity == expected
        assert len(model.list_transactions()) == (2 if ok else 1)
