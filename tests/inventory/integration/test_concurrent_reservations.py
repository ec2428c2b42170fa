"""Concurrent reservations must never oversell a product."""

import threading

import pytest

from inventory.ledger import InsufficientStock, StockLine


def _race(ledger, attempts, lines):
    barrier = threading.Barrier(attempts)
    outcomes = []
    lock = threading.Lock()

    def attempt():
        barrier.wait()
        try:
            ledger.reserve(lines)
        except InsufficientStock:
            result = "rejected"
        else:
            result = "reserved"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt) for _ in range(attempts)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcomes


@pytest.mark.slow
class TestConcurrentReservations:
    def test_only_available_units_are_sold(self, ledger):
        ledger.put_stock("7", 3)

        outcomes = _race(ledger, attempts=6, lines=[StockLine("7", 1)])

        assert outcomes.count("reserved") == 3
        assert outcomes.count("rejected") == 3
        assert ledger.stock_of("7") == 0

    def test_multi_line_batches_stay_consistent(self, ledger):
        ledger.put_stock("7", 2)
        ledger.put_stock("8", 5)

        outcomes = _race(ledger, attempts=4, lines=[StockLine("8", 1), StockLine("7", 1)])

        reserved = outcomes.count("reserved")
        assert reserved == 2
        assert ledger.stock_of("7") == 0
        assert ledger.stock_of("8") == 5 - reserved
