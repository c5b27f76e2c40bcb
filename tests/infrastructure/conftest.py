"""Fixtures backed by a fresh in-memory SQLite database per test."""

from decimal import Decimal

import pytest

from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.persistence.database import build_engine
from storefront.infrastructure.persistence.schema import clients, create_schema, products


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def container(engine) -> Container:
    return Container(engine)


@pytest.fixture
def catalog(engine) -> None:
    """Client 7 'Ana', product 3 'Mug' at 10.00 and product 4 'Notebook' at 2.50."""
    with engine.begin() as conn:
        conn.execute(clients.insert().values(id=7, name="Ana", phone="555-0101"))
        conn.execute(
            products.insert(),
            [
                {"id": 3, "name": "Mug", "description": "Ceramic", "image": "mug.png",
                 "price": Decimal("10.00")},
                {"id": 4, "name": "Notebook", "description": "A5", "image": "nb.png",
                 "price": Decimal("2.50")},
            ],
        )
