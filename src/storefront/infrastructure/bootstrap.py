"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. The engine is created
once and handed to every repository.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from storefront.application.cart_service import CartService
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.database import build_engine
from storefront.infrastructure.persistence.sql_client_repository import (
    SqlClientRepository,
)
from storefront.infrastructure.persistence.sql_line_item_ledger import (
    SqlLineItemLedger,
)
from storefront.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)
from storefront.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)


@dataclass(frozen=True)
class Container:
    engine: Engine

    def client_repository(self) -> SqlClientRepository:
        return SqlClientRepository(self.engine)

    def product_repository(self) -> SqlProductRepository:
        return SqlProductRepository(self.engine)

    def order_repository(self) -> SqlOrderRepository:
        return SqlOrderRepository(self.engine)

    def line_item_ledger(self) -> SqlLineItemLedger:
        return SqlLineItemLedger(self.engine)

    def cart_service(self) -> CartService:
        return CartService(
            order_repo=self.order_repository(),
            ledger=self.line_item_ledger(),
            product_repo=self.product_repository(),
        )


def build_container(settings: Settings) -> Container:
    return Container(build_engine(settings.database_url, echo=settings.sql_echo))
