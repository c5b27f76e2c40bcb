"""Tests for SqlOrderRepository against SQLite."""

import warnings
from datetime import datetime

import pytest

from storefront.domain.exceptions import (
    EntityNotFoundError,
    IntegrityWarning,
    PersistenceError,
)
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.schema import orders

pytestmark = pytest.mark.usefixtures("catalog")

CREATED = datetime(2024, 5, 1, 9, 30)


class TestCreateAndFind:

    def test_create_returns_id_of_active_order(self, container):
        repo = container.order_repository()
        order_id = repo.create(client_id=7, created_at=CREATED)

        order = repo.find_active(7)
        assert order.id == order_id
        assert order.client_id == 7
        assert order.total_value == Money.zero()
        assert order.created_at == CREATED
        assert order.paid is False

    def test_find_active_none_without_orders(self, container):
        assert container.order_repository().find_active(7) is None

    def test_paid_orders_are_not_active(self, container):
        repo = container.order_repository()
        order_id = repo.create(client_id=7, created_at=CREATED)
        repo.mark_paid(order_id)

        assert repo.find_active(7) is None
        assert repo.get_by_id(order_id).paid is True

    def test_second_active_order_refused_by_store(self, container):
        repo = container.order_repository()
        repo.create(client_id=7, created_at=CREATED)

        with pytest.raises(PersistenceError):
            repo.create(client_id=7, created_at=CREATED)

    def test_new_active_order_allowed_after_payment(self, container):
        repo = container.order_repository()
        first = repo.create(client_id=7, created_at=CREATED)
        repo.mark_paid(first)

        second = repo.create(client_id=7, created_at=CREATED)
        assert repo.find_active(7).id == second

    def test_unknown_client_refused(self, container):
        with pytest.raises(PersistenceError):
            container.order_repository().create(client_id=404, created_at=CREATED)

    def test_mark_paid_unknown_order(self, container):
        with pytest.raises(EntityNotFoundError):
            container.order_repository().mark_paid(999)


class TestMultipleActiveOrders:
    """Data written around the unique index still must not break reads."""

    @pytest.fixture
    def duplicated(self, engine):
        with engine.begin() as conn:
            conn.exec_driver_sql("DROP INDEX uq_orders_active_client")
            conn.execute(orders.insert().values(id=20, client_id=7, total_value=0, created_at=CREATED, paid=False))
            conn.execute(orders.insert().values(id=21, client_id=7, total_value=0, created_at=CREATED, paid=False))

    def test_find_active_warns_and_uses_lowest_id(self, container, duplicated):
        with pytest.warns(IntegrityWarning, match="2 unpaid orders"):
            order = container.order_repository().find_active(7)
        assert order.id == 20

    def test_find_active_view_warns_and_uses_lowest_id(self, container, duplicated):
        with pytest.warns(IntegrityWarning):
            view = container.order_repository().find_active_view(7)
        assert view.id == 20


class TestActiveView:

    def test_none_without_active_order(self, container):
        assert container.order_repository().find_active_view(7) is None

    def test_active_order_without_items(self, container):
        repo = container.order_repository()
        order_id = repo.create(client_id=7, created_at=CREATED)

        view = repo.find_active_view(7)
        assert view.id == order_id
        assert view.client.name == "Ana"
        assert view.products == []
        assert view.total_value == Money.zero()

    def test_view_joins_client_and_products(self, container):
        repo = container.order_repository()
        ledger = container.line_item_ledger()
        order_id = repo.create(client_id=7, created_at=CREATED)
        ledger.increment(order_id, 4)
        ledger.increment(order_id, 3)
        ledger.increment(order_id, 4)

        with warnings.catch_warnings():
            warnings.simplefilter("error", IntegrityWarning)
            view = repo.find_active_view(7)

        assert view.id == order_id
        assert view.client_id == 7
        assert view.client.phone == "555-0101"
        assert view.created_at == CREATED
        assert [(p.id, p.name, p.quantity) for p in view.products] == [
            (3, "Mug", 1),
            (4, "Notebook", 2),
        ]
        assert view.products[1].price == Money.of("2.50")
        assert view.total_value == Money.of("15.00")
        assert view.products_total == view.total_value

    def test_paid_order_not_shown(self, container):
        repo = container.order_repository()
        order_id = repo.create(client_id=7, created_at=CREATED)
        container.line_item_ledger().increment(order_id, 3)
        repo.mark_paid(order_id)

        assert repo.find_active_view(7) is None
