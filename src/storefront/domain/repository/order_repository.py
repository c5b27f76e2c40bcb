"""Abstract repository for Order records (the Order Store)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storefront.domain.model.order import Order
from storefront.domain.model.order_view import OrderView
from storefront.domain.model.value_objects import Money


class OrderRepository(ABC):

    @abstractmethod
    def create(
        self,
        client_id: int,
        created_at: datetime,
        initial_total: Money | None = None,
        paid: bool = False,
    ) -> int:
        """Insert a new order and return its ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find_active(self, client_id: int) -> Order | None:
        """Return the client's unpaid order, or None.

        If several unpaid orders exist the lowest ID wins and an
        IntegrityWarning is emitted.
        """

    @abstractmethod
    def find_active_view(self, client_id: int) -> OrderView | None:
        """Return the client's unpaid order joined with client and products."""

    @abstractmethod
    def mark_paid(self, order_id: int) -> None:
        """Flag an order as paid, ending its life as a cart."""
