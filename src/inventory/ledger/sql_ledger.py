"""SQL inventory ledger — conditional decrements inside one transaction.

Each product is decremented with a single guarded statement::

    UPDATE stock_counters
       SET stock_quantity = stock_quantity - :q
     WHERE product_id = :p AND stock_quantity >= :q

A statement that touches no row means the product is short (or unknown),
and raising inside ``engine.begin()`` rolls back every decrement already
applied to the batch. The database row lock is the only mutual exclusion.
"""

from collections.abc import Iterable

import structlog
from sqlalchemy import create_engine, event, insert, select, update
from sqlalchemy.engine import Engine

from inventory.ledger.port import InsufficientStock, Reservation, StockLedger, StockLine, coalesce
from inventory.ledger.tables import metadata, stock_counters

logger = structlog.get_logger(__name__)


class SqlStockLedger(StockLedger):
    def __init__(self, database_uri: str | None = None, engine: Engine | None = None) -> None:
        if engine is None:
            if database_uri is None:
                raise ValueError("SqlStockLedger needs a database_uri or an engine")
            engine = create_engine(database_uri)
        if engine.dialect.name == "sqlite":
            _serialize_sqlite_writers(engine)
        self.engine = engine

    def create_tables(self) -> None:
        metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        metadata.drop_all(self.engine)

    def reserve(self, lines: Iterable[StockLine]) -> Reservation:
        batch = coalesce(lines)
        if not batch:
            raise ValueError("Cannot reserve an empty batch")

        with self.engine.begin() as conn:
            for line in batch:
                result = conn.execute(
                    update(stock_counters)
                    .where(stock_counters.c.product_id == line.product_id)
                    .where(stock_counters.c.stock_quantity >= line.quantity)
                    .values(stock_quantity=stock_counters.c.stock_quantity - line.quantity)
                )
                if result.rowcount == 0:
                    logger.info(
                        "Stock reservation rejected",
                        product_id=line.product_id,
                        requested=line.quantity,
                    )
                    raise InsufficientStock(product_id=line.product_id, requested=line.quantity)

        reservation = Reservation(lines=tuple(batch))
        logger.info(
            "Stock reserved",
            reservation_id=reservation.reservation_id,
            products=[line.product_id for line in batch],
            units=reservation.total_units,
        )
        return reservation

    def release(self, reservation: Reservation) -> None:
        with self.engine.begin() as conn:
            for line in reservation.lines:
                conn.execute(
                    update(stock_counters)
                    .where(stock_counters.c.product_id == line.product_id)
                    .values(stock_quantity=stock_counters.c.stock_quantity + line.quantity)
                )
        logger.warning(
            "Stock reservation released",
            reservation_id=reservation.reservation_id,
            units=reservation.total_units,
        )

    def stock_of(self, product_id: str) -> int | None:
        with self.engine.connect() as conn:
            return conn.execute(
                select(stock_counters.c.stock_quantity).where(stock_counters.c.product_id == str(product_id))
            ).scalar_one_or_none()

    def put_stock(self, product_id: str, quantity: int) -> None:
        if quantity < 0:
            raise ValueError("Stock quantity cannot be negative")

        with self.engine.begin() as conn:
            result = conn.execute(
                update(stock_counters)
                .where(stock_counters.c.product_id == str(product_id))
                .values(stock_quantity=quantity)
            )
            if result.rowcount == 0:
                conn.execute(insert(stock_counters).values(product_id=str(product_id), stock_quantity=quantity))


def _serialize_sqlite_writers(engine: Engine) -> None:
    """Open every SQLite transaction with BEGIN IMMEDIATE.

    pysqlite defers BEGIN until the first write, so two reservations can
    both hold a read lock and fail to upgrade. Taking the write lock up
    front makes concurrent reservations queue on the busy timeout.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
