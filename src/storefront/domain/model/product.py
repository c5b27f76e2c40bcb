"""Product aggregate.

Products live independently of orders. The cart engine only reads them:
a line item stores the product id and the order total is always priced
with the product's current price.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product in the catalog."""

    id: int
    name: str
    price: Money
    description: str = ""
    image: str = ""
