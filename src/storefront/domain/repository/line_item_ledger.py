"""Abstract Line-Item Ledger.

The ledger owns the ``(order, product) -> quantity`` rows of every order
and is the only writer of an order's ``total_value``. Implementations
must recompute the total from scratch after each mutation and apply the
row change and the new total atomically.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import LineItem


class LineItemLedger(ABC):

    @abstractmethod
    def get(self, order_id: int, product_id: int) -> LineItem | None:
        """Return the line item for the pair, or None."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[LineItem]:
        """Return every line item of an order."""

    @abstractmethod
    def increment(self, order_id: int, product_id: int) -> None:
        """Add one unit of a product, inserting the row on first add.

        Raises EntityNotFoundError if the order does not exist.
        """

    @abstractmethod
    def decrement(self, order_id: int, product_id: int) -> None:
        """Take one unit away, deleting the row when the last unit goes.

        A pair that is not in the order is left alone.
        """
