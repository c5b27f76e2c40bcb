"""SQL implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.exceptions import PersistenceError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.schema import products, to_money


class SqlProductRepository(ProductRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        return self._first(
            select(products).where(products.c.id == product_id),
            f"Could not load product #{product_id}",
        )

    def get_by_name(self, name: str) -> Product | None:
        return self._first(
            select(products).where(func.lower(products.c.name) == name.strip().lower()),
            f"Could not look up product '{name}'",
        )

    def list_all(self) -> list[Product]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(select(products).order_by(products.c.id)).all()
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not list products") from exc
        return [self._to_domain(row) for row in rows]

    def add(self, name: str, price: Money, description: str, image: str) -> Product:
        stmt = insert(products).values(
            name=name,
            price=price.amount,
            description=description,
            image=image,
        )
        try:
            with self._engine.begin() as conn:
                product_id = conn.execute(stmt).inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not create product '{name}'") from exc
        return Product(
            id=product_id,
            name=name,
            price=price,
            description=description,
            image=image,
        )

    # --- Helpers --------------------------------------------------------------

    def _first(self, stmt, failure: str) -> Product | None:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(failure) from exc
        return self._to_domain(row) if row is not None else None

    @staticmethod
    def _to_domain(row: Row) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=to_money(row.price),
            description=row.description or "",
            image=row.image or "",
        )
