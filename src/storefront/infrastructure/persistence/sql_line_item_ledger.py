"""SQL implementation of the Line-Item Ledger.

Every mutation runs in a single transaction: the row change, the
recomputation of the order total and the write of that total commit or
roll back together. Quantities are changed by the UPDATE itself
(`quantity = quantity + 1`), never read, changed and written back.
"""

from __future__ import annotations

import structlog
from sqlalchemy import Numeric, and_, cast, delete, func, insert, select, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.exceptions import EntityNotFoundError, PersistenceError
from storefront.domain.model.order import LineItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.line_item_ledger import LineItemLedger
from storefront.infrastructure.persistence.schema import (
    order_items,
    orders,
    products,
    to_money,
)

logger = structlog.get_logger(__name__)


class SqlLineItemLedger(LineItemLedger):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- Reads ----------------------------------------------------------------

    def get(self, order_id: int, product_id: int) -> LineItem | None:
        try:
            with self._engine.connect() as conn:
                return self._select_item(conn, order_id, product_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not load product #{product_id} of order #{order_id}"
            ) from exc

    def list_for_order(self, order_id: int) -> list[LineItem]:
        stmt = (
            select(order_items)
            .where(order_items.c.order_id == order_id)
            .order_by(order_items.c.product_id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not list items of order #{order_id}") from exc
        return [
            LineItem(row.order_id, row.product_id, Quantity(row.quantity))
            for row in rows
        ]

    # --- Mutations ------------------------------------------------------------

    def increment(self, order_id: int, product_id: int) -> None:
        try:
            with self._engine.begin() as conn:
                self._require_order(conn, order_id)
                bumped = conn.execute(
                    update(order_items)
                    .where(self._pair(order_id, product_id))
                    .values(quantity=order_items.c.quantity + 1)
                ).rowcount
                if not bumped:
                    item = LineItem.first_unit(order_id, product_id)
                    conn.execute(
                        insert(order_items).values(
                            order_id=order_id,
                            product_id=product_id,
                            quantity=item.quantity.value,
                        )
                    )
                item = self._select_item(conn, order_id, product_id)
                total = self._refresh_total(conn, order_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not add product #{product_id} to order #{order_id}"
            ) from exc
        logger.debug(
            "line_item_incremented",
            order_id=order_id,
            product_id=product_id,
            quantity=item.quantity.value,
            total=str(total.amount),
        )

    def decrement(self, order_id: int, product_id: int) -> None:
        try:
            with self._engine.begin() as conn:
                lowered = conn.execute(
                    update(order_items)
                    .where(self._pair(order_id, product_id), order_items.c.quantity > 1)
                    .values(quantity=order_items.c.quantity - 1)
                ).rowcount
                if not lowered:
                    removed = conn.execute(
                        delete(order_items).where(self._pair(order_id, product_id))
                    ).rowcount
                    if not removed:
                        return
                remaining = self._select_item(conn, order_id, product_id)
                total = self._refresh_total(conn, order_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not remove product #{product_id} from order #{order_id}"
            ) from exc
        logger.debug(
            "line_item_decremented",
            order_id=order_id,
            product_id=product_id,
            quantity=remaining.quantity.value if remaining else 0,
            total=str(total.amount),
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _pair(order_id: int, product_id: int):
        return and_(
            order_items.c.order_id == order_id,
            order_items.c.product_id == product_id,
        )

    @staticmethod
    def _require_order(conn: Connection, order_id: int) -> None:
        found = conn.execute(select(orders.c.id).where(orders.c.id == order_id)).first()
        if found is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

    @classmethod
    def _select_item(cls, conn: Connection, order_id: int, product_id: int) -> LineItem | None:
        row = conn.execute(
            select(order_items.c.quantity).where(cls._pair(order_id, product_id))
        ).first()
        if row is None:
            return None
        return LineItem(order_id, product_id, Quantity(row.quantity))

    @staticmethod
    def _refresh_total(conn: Connection, order_id: int) -> Money:
        """Recompute the order total from its rows and store it.

        SUM over zero rows is NULL, so it is coalesced to 0.
        """
        total_stmt = (
            select(
                cast(
                    func.coalesce(func.sum(products.c.price * order_items.c.quantity), 0),
                    Numeric(10, 2),
                )
            )
            .select_from(
                products.join(order_items, products.c.id == order_items.c.product_id)
            )
            .where(order_items.c.order_id == order_id)
        )
        total = to_money(conn.execute(total_stmt).scalar_one())
        conn.execute(
            update(orders).where(orders.c.id == order_id).values(total_value=total.amount)
        )
        return total
