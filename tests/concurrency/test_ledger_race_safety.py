"""
Race-safety tests for InventoryModel.

Each test releases many threads at once through a Barrier so the
check-then-act sections (existence check + insert, quantity check +
decrement) actually contend.

Run with:
    pytest tests/concurrency -v
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from threading import Barrier

import pytest

from inventory_kernel.domain.dtos import MutationStatus, TransactionKind
from inventory_kernel.services.ledger_auditor import LedgerAuditor

pytestmark = pytest.mark.concurrency

THREADS = 32


def _run_concurrently(fn, count: int = THREADS) -> list:
    barrier = Barrier(count)

    def worker(i):
        barrier.wait()
        return fn(i)

    with ThreadPoolExecutor(max_workers=count) as pool:
        return list(pool.map(worker, range(count)))


class TestDuplicateInsertRace:
    def test_only_one_add_wins(self, model, make_item):
        results = _run_concurrently(
            lambda i: model.add_item(make_item("SKU-RACE", name=f"racer-{i}", quantity=i), f"t{i}")
        )

        assert results.count(True) == 1
        assert len(model.list_items()) == 1
        assert len(model.list_transactions()) == 1
        winner = model.find_by_sku("SKU-RACE")
        assert model.list_transactions()[0].item_name == winner.name


class TestOversellRace:
    def test_removals_never_oversell(self, model, make_item):
        model.add_item(make_item("SKU-1", quantity=10), "admin")

        results = _run_concurrently(
            lambda i: model.try_remove_stock("SKU-1", 1, f"t{i}").status
        )

        assert results.count(MutationStatus.APPLIED) == 10
        assert results.count(MutationStatus.INSUFFICIENT_QUANTITY) == THREADS - 10
        assert model.find_by_sku("SKU-1").quantity == 0
        assert LedgerAuditor(model).validate_log() is True

    def test_mixed_adds_and_removes_balance(self, model, make_item):
        model.add_item(make_item("SKU-1", quantity=100), "admin")

        def op(i):
            if i % 2:
                return ("add", model.add_stock("SKU-1", 3, f"t{i}"))
            return ("remove", model.remove_stock("SKU-1", 2, f"t{i}"))

        results = _run_concurrently(op)

        added = sum(3 for kind, ok in results if kind == "add" and ok)
        removed = sum(2 for kind, ok in results if kind == "remove" and ok)
        assert model.find_by_sku("SKU-1").quantity == 100 + added - removed
        assert LedgerAuditor(model).validate_log() is True


class TestIdAllocationRace:
    def test_ids_unique_and_dense(self, model, make_item):
        _run_concurrently(lambda i: model.add_item(make_item(f"SKU-{i}", quantity=1), f"t{i}"))

        log = model.list_transactions()
        assert len(log) == THREADS
        assert [r.sequence for r in log] == list(range(1, THREADS + 1))
        assert len({r.transaction_id for r in log}) == THREADS


class TestConsistentReads:
    def test_readers_never_see_half_applied_mutation(self, model, make_item):
        """
        Every writer call moves one unit between two SKUs via two separate
        logged operations; readers only check that each snapshot matches its
        own log replay, which a torn read would break.
        """
        model.add_item(make_item("A", quantity=50, unit_price="2"), "admin")
        model.add_item(make_item("B", quantity=50, unit_price="2"), "admin")
        stop = threading.Event()
        failures: list[str] = []

        def reader():
            while not stop.is_set():
                items, log = model.snapshot()
                replayed = LedgerAuditor.replay(log)
                current = {i.sku: i.quantity for i in items}
                if replayed != current:
                    failures.append(f"{replayed} != {current}")
                summary = model.summary()
                if summary.total_value != Decimal(2) * summary.total_units:
                    failures.append(f"summary torn: {summary}")

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        try:
            def writer(i):
                for _ in range(20):
                    if model.remove_stock("A", 1, f"w{i}"):
                        model.add_stock("B", 1, f"w{i}")

            _run_concurrently(writer, count=8)
        finally:
            stop.set()
            for t in readers:
                t.join()

        assert failures == []
        kinds = {r.kind for r in model.list_transactions()}
        assert kinds == {
            TransactionKind.NEW_ITEM,
            TransactionKind.ADD_STOCK,
            TransactionKind.REMOVE_STOCK,
        }
        assert LedgerAuditor(model).validate_log() is True
