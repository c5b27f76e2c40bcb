"""Read-only aggregate of an order, its client and its products.

The store hands back one flat row per line item (order and client
columns repeated on every row). ``group_order_rows`` folds those rows
into one ``OrderView`` per order id.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from storefront.domain.model.client import Client
from storefront.domain.model.order import order_total
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductLine:
    """A product in the cart together with the quantity ordered."""

    id: int
    name: str
    description: str
    image: str
    price: Money
    quantity: int

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity


@dataclass
class OrderView:
    id: int
    client_id: int
    total_value: Money
    created_at: datetime | None
    paid: bool
    client: Client
    products: list[ProductLine] = field(default_factory=list)

    @staticmethod
    def empty() -> OrderView:
        """The view shown when a client has no cart (or it cannot be read)."""
        return OrderView(
            id=0,
            client_id=0,
            total_value=Money.zero(),
            created_at=None,
            paid=False,
            client=Client.placeholder(),
            products=[],
        )

    @property
    def is_empty(self) -> bool:
        return not self.products

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.products)

    @property
    def products_total(self) -> Money:
        """Total priced from the view's own lines; matches ``total_value``."""
        return order_total((line.price, line.quantity) for line in self.products)


@dataclass(frozen=True)
class OrderViewRow:
    """One row of the order ⋈ client ⋈ line item ⋈ product join.

    Product columns are None for an order that has no line items yet.
    """

    order_id: int
    order_total: Money
    order_created_at: datetime | None
    order_paid: bool
    client_id: int
    client_name: str
    client_phone: str
    product_id: int | None = None
    product_name: str | None = None
    product_description: str | None = None
    product_image: str | None = None
    product_price: Money | None = None
    quantity: int | None = None


def group_order_rows(rows: Iterable[OrderViewRow]) -> list[OrderView]:
    """Fold joined rows into views, one per order id, in first-seen order."""
    views: dict[int, OrderView] = {}
    for row in rows:
        view = views.get(row.order_id)
        if view is None:
            view = OrderView(
                id=row.order_id,
                client_id=row.client_id,
                total_value=row.order_total,
                created_at=row.order_created_at,
                paid=row.order_paid,
                client=Client(
                    id=row.client_id,
                    name=row.client_name,
                    phone=row.client_phone,
                ),
            )
            views[row.order_id] = view

        if row.product_id is None:
            continue
        view.products.append(
            ProductLine(
                id=row.product_id,
                name=row.product_name or "",
                description=row.product_description or "",
                image=row.product_image or "",
                price=row.product_price or Money.zero(),
                quantity=row.quantity or 0,
            )
        )
    return list(views.values())
