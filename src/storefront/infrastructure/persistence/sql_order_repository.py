"""SQL implementation of OrderRepository (the Order Store)."""

from __future__ import annotations

import warnings
from datetime import datetime

import structlog
from sqlalchemy import false, insert, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.exceptions import (
    EntityNotFoundError,
    IntegrityWarning,
    PersistenceError,
)
from storefront.domain.model.order import Order
from storefront.domain.model.order_view import OrderView, OrderViewRow, group_order_rows
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.schema import (
    clients,
    order_items,
    orders,
    products,
    to_money,
)

logger = structlog.get_logger(__name__)


class SqlOrderRepository(OrderRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- OrderRepository interface --------------------------------------------

    def create(
        self,
        client_id: int,
        created_at: datetime,
        initial_total: Money | None = None,
        paid: bool = False,
    ) -> int:
        total = initial_total or Money.zero()
        stmt = insert(orders).values(
            client_id=client_id,
            total_value=total.amount,
            created_at=created_at,
            paid=paid,
        )
        try:
            with self._engine.begin() as conn:
                order_id = conn.execute(stmt).inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not create order for client #{client_id}"
            ) from exc
        logger.info("order_created", order_id=order_id, client_id=client_id)
        return order_id

    def get_by_id(self, order_id: int) -> Order | None:
        stmt = select(orders).where(orders.c.id == order_id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not load order #{order_id}") from exc
        return self._to_domain(row) if row is not None else None

    def find_active(self, client_id: int) -> Order | None:
        stmt = (
            select(orders)
            .where(orders.c.client_id == client_id, orders.c.paid == false())
            .order_by(orders.c.id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not look up the active order of client #{client_id}"
            ) from exc

        if not rows:
            return None
        if len(rows) > 1:
            self._warn_multiple_active(client_id, [row.id for row in rows])
        return self._to_domain(rows[0])

    def find_active_view(self, client_id: int) -> OrderView | None:
        stmt = (
            select(
                orders.c.id.label("order_id"),
                orders.c.total_value.label("order_total"),
                orders.c.created_at.label("order_created_at"),
                orders.c.paid.label("order_paid"),
                clients.c.id.label("client_id"),
                clients.c.name.label("client_name"),
                clients.c.phone.label("client_phone"),
                products.c.id.label("product_id"),
                products.c.name.label("product_name"),
                products.c.description.label("product_description"),
                products.c.image.label("product_image"),
                products.c.price.label("product_price"),
                order_items.c.quantity,
            )
            .select_from(
                orders.join(clients, orders.c.client_id == clients.c.id)
                .outerjoin(order_items, order_items.c.order_id == orders.c.id)
                .outerjoin(products, products.c.id == order_items.c.product_id)
            )
            .where(orders.c.client_id == client_id, orders.c.paid == false())
            .order_by(orders.c.id, products.c.id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not load the cart of client #{client_id}"
            ) from exc

        views = group_order_rows(self._to_view_row(row) for row in rows)
        if not views:
            return None
        if len(views) > 1:
            self._warn_multiple_active(client_id, [view.id for view in views])
        return views[0]

    def mark_paid(self, order_id: int) -> None:
        try:
            with self._engine.begin() as conn:
                updated = conn.execute(
                    update(orders).where(orders.c.id == order_id).values(paid=True)
                ).rowcount
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not mark order #{order_id} as paid") from exc
        if updated == 0:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        logger.info("order_paid", order_id=order_id)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: Row) -> Order:
        return Order(
            id=row.id,
            client_id=row.client_id,
            total_value=to_money(row.total_value),
            created_at=row.created_at,
            paid=bool(row.paid),
        )

    @staticmethod
    def _to_view_row(row: Row) -> OrderViewRow:
        return OrderViewRow(
            order_id=row.order_id,
            order_total=to_money(row.order_total),
            order_created_at=row.order_created_at,
            order_paid=bool(row.order_paid),
            client_id=row.client_id,
            client_name=row.client_name,
            client_phone=row.client_phone or "",
            product_id=row.product_id,
            product_name=row.product_name,
            product_description=row.product_description,
            product_image=row.product_image,
            product_price=to_money(row.product_price) if row.product_id is not None else None,
            quantity=row.quantity,
        )

    @staticmethod
    def _warn_multiple_active(client_id: int, order_ids: list[int]) -> None:
        logger.warning(
            "multiple_active_orders",
            client_id=client_id,
            order_ids=order_ids,
            using=order_ids[0],
        )
        warnings.warn(
            f"Client #{client_id} has {len(order_ids)} unpaid orders; "
            f"using order #{order_ids[0]}",
            IntegrityWarning,
            stacklevel=3,
        )
