"""Application service: the shopping cart.

Coordinates the Order Store, the Line-Item Ledger and the Product Catalog.
This is the boundary where typed domain errors are logged and collapsed
into the plain success/failure signal (or empty view) the presentation
layer works with.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from storefront.domain.exceptions import DomainException, EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.model.order_view import OrderView
from storefront.domain.repository.line_item_ledger import LineItemLedger
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form the store keeps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CartService:

    def __init__(
        self,
        order_repo: OrderRepository,
        ledger: LineItemLedger,
        product_repo: ProductRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger
        self._product_repo = product_repo
        self._clock = clock

    def add_to_cart(self, client_id: int, product_id: int) -> bool:
        """Add one unit of a product to the client's active order.

        Steps:
        1. Find the client's active order, creating it if there is none
           (one creation, then one more lookup; a failed creation ends the call).
        2. Make sure the product exists before touching the ledger.
        3. Increment the line item; the ledger recomputes the total.
        """
        log = logger.bind(client_id=client_id, product_id=product_id)
        try:
            order = self._ensure_active_order(client_id)
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")
            self._ledger.increment(order.id, product.id)
        except DomainException as exc:
            log.warning("add_to_cart_failed", error=str(exc), error_type=type(exc).__name__)
            return False

        log.info("added_to_cart", order_id=order.id)
        return True

    def remove_from_cart(self, order_id: int, product_id: int) -> bool:
        """Take one unit of a product out of an order.

        Removing something that is not in the order succeeds and changes
        nothing. Never creates an order.
        """
        log = logger.bind(order_id=order_id, product_id=product_id)
        try:
            self._ledger.decrement(order_id, product_id)
        except DomainException as exc:
            log.warning("remove_from_cart_failed", error=str(exc), error_type=type(exc).__name__)
            return False

        log.info("removed_from_cart")
        return True

    def active_cart(self, client_id: int) -> OrderView:
        """The client's cart for display; an empty view if there is none."""
        try:
            view = self._order_repo.find_active_view(client_id)
        except DomainException as exc:
            logger.warning(
                "active_cart_failed",
                client_id=client_id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return OrderView.empty()

        return view if view is not None else OrderView.empty()

    # --- Internal helpers -----------------------------------------------------

    def _ensure_active_order(self, client_id: int) -> Order:
        order = self._order_repo.find_active(client_id)
        if order is not None:
            return order

        self._order_repo.create(client_id=client_id, created_at=self._clock())

        order = self._order_repo.find_active(client_id)
        if order is None:
            raise EntityNotFoundError(
                f"Active order for client #{client_id} missing right after creation"
            )
        return order
