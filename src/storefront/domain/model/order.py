"""Order and LineItem, the records the cart engine keeps consistent.

An Order's ``total_value`` is derived state: it always equals the sum of
``price * quantity`` over its line items and is recomputed after every
ledger mutation rather than patched.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class Order:
    """A client's order. The single unpaid order of a client is its cart."""

    id: int
    client_id: int
    total_value: Money = field(default_factory=Money.zero)
    created_at: datetime | None = None
    paid: bool = False

    @property
    def is_active(self) -> bool:
        return not self.paid


@dataclass(frozen=True)
class LineItem:
    """How many units of one product an order holds.

    Identity is the ``(order_id, product_id)`` pair.
    """

    order_id: int
    product_id: int
    quantity: Quantity

    @staticmethod
    def first_unit(order_id: int, product_id: int) -> LineItem:
        return LineItem(order_id, product_id, Quantity(1))


def order_total(priced_quantities: Iterable[tuple[Money, int]]) -> Money:
    """Sum of ``price * quantity``; zero for an empty order."""
    result = Money.zero()
    for price, quantity in priced_quantities:
        result = result + price * quantity
    return result
