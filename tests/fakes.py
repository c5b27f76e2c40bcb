"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the SQL repositories
but keep everything in dicts shared through a FakeDatabase. No engine,
no side effects. ``FakeDatabase.fail_on`` makes a named operation raise
PersistenceError, standing in for a broken store.
"""

from __future__ import annotations

import warnings
from dataclasses import replace
from datetime import datetime

from storefront.domain.exceptions import (
    EntityNotFoundError,
    IntegrityWarning,
    PersistenceError,
)
from storefront.domain.model.client import Client
from storefront.domain.model.order import LineItem, Order, order_total
from storefront.domain.model.order_view import OrderView, OrderViewRow, group_order_rows
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.client_repository import ClientRepository
from storefront.domain.repository.line_item_ledger import LineItemLedger
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class FakeDatabase:

    def __init__(
        self,
        clients: list[Client] | None = None,
        products: list[Product] | None = None,
    ) -> None:
        self.clients: dict[int, Client] = {c.id: c for c in clients or []}
        self.products: dict[int, Product] = {p.id: p for p in products or []}
        self.orders: dict[int, Order] = {}
        self.items: dict[tuple[int, int], int] = {}
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    def check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise PersistenceError(f"simulated failure in {operation}")

    def next_id(self, table: dict) -> int:
        return max(table, default=0) + 1


class FakeClientRepository(ClientRepository):

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def get_by_id(self, client_id: int) -> Client | None:
        self._db.check("client.get_by_id")
        return self._db.clients.get(client_id)

    def list_all(self) -> list[Client]:
        return list(self._db.clients.values())

    def add(self, name: str, phone: str) -> Client:
        self._db.check("client.add")
        client = Client(id=self._db.next_id(self._db.clients), name=name, phone=phone)
        self._db.clients[client.id] = client
        return client

    def update(self, client: Client) -> None:
        self._db.clients[client.id] = client

    def delete(self, client_id: int) -> None:
        del self._db.clients[client_id]

    def has_orders(self, client_id: int) -> bool:
        return any(o.client_id == client_id for o in self._db.orders.values())


class FakeProductRepository(ProductRepository):

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def get_by_id(self, product_id: int) -> Product | None:
        self._db.check("product.get_by_id")
        return self._db.products.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._db.products.values():
            if p.name.lower() == name.strip().lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._db.products.values())

    def add(self, name: str, price: Money, description: str, image: str) -> Product:
        product = Product(
            id=self._db.next_id(self._db.products),
            name=name,
            price=price,
            description=description,
            image=image,
        )
        self._db.products[product.id] = product
        return product


class FakeOrderRepository(OrderRepository):

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def create(
        self,
        client_id: int,
        created_at: datetime,
        initial_total: Money | None = None,
        paid: bool = False,
    ) -> int:
        self._db.check("order.create")
        order = Order(
            id=self._db.next_id(self._db.orders),
            client_id=client_id,
            total_value=initial_total or Money.zero(),
            created_at=created_at,
            paid=paid,
        )
        self._db.orders[order.id] = order
        return order.id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._db.orders.get(order_id)

    def find_active(self, client_id: int) -> Order | None:
        self._db.check("order.find_active")
        active = self._active_orders(client_id)
        return active[0] if active else None

    def find_active_view(self, client_id: int) -> OrderView | None:
        self._db.check("order.find_active_view")
        rows = []
        for order in self._active_orders(client_id):
            client = self._db.clients[order.client_id]
            base = OrderViewRow(
                order_id=order.id,
                order_total=order.total_value,
                order_created_at=order.created_at,
                order_paid=order.paid,
                client_id=client.id,
                client_name=client.name,
                client_phone=client.phone,
            )
            lines = [
                (product_id, qty)
                for (order_id, product_id), qty in sorted(self._db.items.items())
                if order_id == order.id
            ]
            if not lines:
                rows.append(base)
            for product_id, qty in lines:
                product = self._db.products[product_id]
                rows.append(
                    replace(
                        base,
                        product_id=product.id,
                        product_name=product.name,
                        product_description=product.description,
                        product_image=product.image,
                        product_price=product.price,
                        quantity=qty,
                    )
                )
        views = group_order_rows(rows)
        return views[0] if views else None

    def mark_paid(self, order_id: int) -> None:
        order = self._db.orders.get(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        order.paid = True

    def _active_orders(self, client_id: int) -> list[Order]:
        active = sorted(
            (o for o in self._db.orders.values() if o.client_id == client_id and o.is_active),
            key=lambda o: o.id,
        )
        if len(active) > 1:
            warnings.warn("multiple unpaid orders", IntegrityWarning, stacklevel=3)
        return active


class FakeLineItemLedger(LineItemLedger):

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def get(self, order_id: int, product_id: int) -> LineItem | None:
        qty = self._db.items.get((order_id, product_id))
        return LineItem(order_id, product_id, Quantity(qty)) if qty else None

    def list_for_order(self, order_id: int) -> list[LineItem]:
        return [
            LineItem(o, p, Quantity(q))
            for (o, p), q in sorted(self._db.items.items())
            if o == order_id
        ]

    def increment(self, order_id: int, product_id: int) -> None:
        self._db.check("ledger.increment")
        if order_id not in self._db.orders:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        self._db.items[(order_id, product_id)] = self._db.items.get((order_id, product_id), 0) + 1
        self._refresh_total(order_id)

    def decrement(self, order_id: int, product_id: int) -> None:
        self._db.check("ledger.decrement")
        item = self.get(order_id, product_id)
        if item is None:
            return
        if item.quantity.value == 1:
            del self._db.items[(order_id, product_id)]
        else:
            self._db.items[(order_id, product_id)] -= 1
        self._refresh_total(order_id)

    def _refresh_total(self, order_id: int) -> None:
        self._db.orders[order_id].total_value = order_total(
            (self._db.products[item.product_id].price, item.quantity.value)
            for item in self.list_for_order(order_id)
        )
