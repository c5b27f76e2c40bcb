"""Relational schema, declared with SQLAlchemy Core.

``orders`` carries a partial unique index on ``client_id`` restricted to
unpaid rows: the store itself refuses a second active order per client.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    false,
)
from sqlalchemy.engine import Engine

from storefront.domain.model.value_objects import Money

metadata = MetaData()

clients = Table(
    "clients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(120), nullable=False),
    Column("phone", String(40), nullable=False, default=""),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(120), nullable=False),
    Column("description", String(500), nullable=False, default=""),
    Column("image", String(255), nullable=False, default=""),
    Column("price", Numeric(10, 2), nullable=False),
    CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("client_id", Integer, ForeignKey("clients.id"), nullable=False),
    Column("total_value", Numeric(10, 2), nullable=False, default=0),
    Column("created_at", DateTime, nullable=False),
    Column("paid", Boolean, nullable=False, default=False),
)

Index(
    "uq_orders_active_client",
    orders.c.client_id,
    unique=True,
    sqlite_where=orders.c.paid == false(),
    postgresql_where=orders.c.paid == false(),
)

order_items = Table(
    "order_items",
    metadata,
    Column("order_id", Integer, ForeignKey("orders.id"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id"), primary_key=True),
    Column("quantity", Integer, nullable=False),
    CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
)

_CENTS = Decimal("0.01")


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)


def to_money(value) -> Money:
    """Convert a NUMERIC column (Decimal, float or NULL) into Money."""
    if value is None:
        return Money.zero()
    return Money(Decimal(str(value)).quantize(_CENTS))
