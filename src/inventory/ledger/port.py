"""Inventory ledger port (abstract interface).

The ledger is the single authority on stock counts. A reservation is
all-or-nothing across every line of a cart: either every product is
decremented or none is.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import uuid4

from shared.errors import Conflict


class InsufficientStock(Conflict):
    """A product in the batch has fewer units than requested."""

    def __init__(self, product_id: str, requested: int) -> None:
        super().__init__(f"Insufficient stock for product {product_id}")
        self.product_id = product_id
        self.requested = requested


@dataclass(frozen=True)
class StockLine:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class Reservation:
    """Record of a committed decrement, used only for compensation."""

    lines: tuple[StockLine, ...]
    reservation_id: str = field(default_factory=lambda: f"RSV-{uuid4().hex[:10].upper()}")

    @property
    def total_units(self) -> int:
        return sum(line.quantity for line in self.lines)


def coalesce(lines: Iterable[StockLine]) -> list[StockLine]:
    """Merge duplicate product lines and order them by product id.

    A stable product order keeps row locks acquired in the same sequence
    by every concurrent reservation.
    """
    totals: dict[str, int] = {}
    for line in lines:
        if line.quantity <= 0:
            raise ValueError(f"Quantity for product {line.product_id} must be positive")
        totals[str(line.product_id)] = totals.get(str(line.product_id), 0) + line.quantity
    return [StockLine(product_id=pid, quantity=qty) for pid, qty in sorted(totals.items())]


class StockLedger(ABC):
    """Abstract inventory ledger."""

    @abstractmethod
    def reserve(self, lines: Iterable[StockLine]) -> Reservation:
        """Atomically decrement stock for every line.

        Raises:
            InsufficientStock: when any product lacks the requested units.
                No counter is changed in that case.
        """
        ...

    @abstractmethod
    def release(self, reservation: Reservation) -> None:
        """Return the units of a reservation to stock."""
        ...

    @abstractmethod
    def stock_of(self, product_id: str) -> int | None:
        """Current stock for a product, or None if it has no counter."""
        ...

    @abstractmethod
    def put_stock(self, product_id: str, quantity: int) -> None:
        """Set the counter for a product (seeding and catalogue sync)."""
        ...
