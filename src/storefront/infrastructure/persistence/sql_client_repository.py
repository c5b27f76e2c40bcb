"""SQL implementation of ClientRepository."""

from __future__ import annotations

from sqlalchemy import delete, exists, insert, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.exceptions import PersistenceError
from storefront.domain.model.client import Client
from storefront.domain.repository.client_repository import ClientRepository
from storefront.infrastructure.persistence.schema import clients, orders


class SqlClientRepository(ClientRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # --- ClientRepository interface -------------------------------------------

    def get_by_id(self, client_id: int) -> Client | None:
        stmt = select(clients).where(clients.c.id == client_id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not load client #{client_id}") from exc
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Client]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(select(clients).order_by(clients.c.id)).all()
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not list clients") from exc
        return [self._to_domain(row) for row in rows]

    def add(self, name: str, phone: str) -> Client:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(insert(clients).values(name=name, phone=phone))
                client_id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not create client '{name}'") from exc
        return Client(id=client_id, name=name, phone=phone)

    def update(self, client: Client) -> None:
        stmt = (
            update(clients)
            .where(clients.c.id == client.id)
            .values(name=client.name, phone=client.phone)
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not update client #{client.id}") from exc

    def delete(self, client_id: int) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(delete(clients).where(clients.c.id == client_id))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not delete client #{client_id}") from exc

    def has_orders(self, client_id: int) -> bool:
        stmt = select(exists().where(orders.c.client_id == client_id))
        try:
            with self._engine.connect() as conn:
                return bool(conn.execute(stmt).scalar())
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not check orders of client #{client_id}") from exc

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: Row) -> Client:
        return Client(id=row.id, name=row.name, phone=row.phone or "")
