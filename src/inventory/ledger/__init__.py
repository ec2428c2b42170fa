"""Inventory ledger factory.

Provides get_ledger() / set_ledger() to swap the ledger's backing store.
The default ledger connects to INVENTORY_DATABASE_URI (a local SQLite
file when unset) and creates its table on first use.
"""

import os

from inventory.ledger.port import InsufficientStock, Reservation, StockLedger, StockLine
from inventory.ledger.sql_ledger import SqlStockLedger

_current_ledger: StockLedger | None = None


def get_ledger() -> StockLedger:
    """Return the current inventory ledger."""
    global _current_ledger
    if _current_ledger is None:
        ledger = SqlStockLedger(os.getenv("INVENTORY_DATABASE_URI", "sqlite:///inventory.db"))
        ledger.create_tables()
        _current_ledger = ledger
    return _current_ledger


def set_ledger(ledger: StockLedger) -> None:
    """Override the active ledger (useful for tests)."""
    global _current_ledger
    _current_ledger = ledger


def reset_ledger() -> None:
    """Reset to the default ledger."""
    global _current_ledger
    _current_ledger = None


__all__ = [
    "InsufficientStock",
    "Reservation",
    "StockLedger",
    "StockLine",
    "get_ledger",
    "reset_ledger",
    "set_ledger",
]
