"""SQLAlchemy table definitions owned by the inventory ledger."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, MetaData, String, Table, func

metadata = MetaData()

stock_counters = Table(
    "stock_counters",
    metadata,
    Column("product_id", String(64), primary_key=True),
    Column("stock_quantity", Integer, nullable=False, default=0),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now()),
    CheckConstraint("stock_quantity >= 0", name="ck_stock_counters_non_negative"),
)
