"""Application services for the client directory."""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import (
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)
from storefront.domain.model.client import NOT_FOUND_NAME, Client
from storefront.domain.repository.client_repository import ClientRepository

logger = structlog.get_logger(__name__)


class CreateClientHandler:

    def __init__(self, client_repo: ClientRepository) -> None:
        self._client_repo = client_repo

    def handle(self, name: str, phone: str = "") -> Client:
        name, phone = Client.validate(name, phone)
        return self._client_repo.add(name=name, phone=phone)


class UpdateClientHandler:

    def __init__(self, client_repo: ClientRepository) -> None:
        self._client_repo = client_repo

    def handle(self, client_id: int, name: str, phone: str = "") -> Client:
        if self._client_repo.get_by_id(client_id) is None:
            raise EntityNotFoundError(f"Client #{client_id} not found")

        name, phone = Client.validate(name, phone)
        client = Client(id=client_id, name=name, phone=phone)
        self._client_repo.update(client)
        return client


class DeleteClientHandler:

    def __init__(self, client_repo: ClientRepository) -> None:
        self._client_repo = client_repo

    def handle(self, client_id: int) -> None:
        """Delete a client that has never placed an order."""
        if self._client_repo.get_by_id(client_id) is None:
            raise EntityNotFoundError(f"Client #{client_id} not found")
        if self._client_repo.has_orders(client_id):
            raise ValidationError(
                f"Client #{client_id} has orders and cannot be deleted"
            )
        self._client_repo.delete(client_id)


class FindClientHandler:

    def __init__(self, client_repo: ClientRepository) -> None:
        self._client_repo = client_repo

    def handle(self, client_id: int) -> Client:
        """Return the client, or a placeholder carrying the requested ID.

        The placeholder also stands in when the store cannot be read.
        """
        try:
            client = self._client_repo.get_by_id(client_id)
        except PersistenceError as exc:
            logger.warning("find_client_failed", client_id=client_id, error=str(exc))
            return Client.placeholder(client_id, NOT_FOUND_NAME)
        if client is None:
            return Client.placeholder(client_id, NOT_FOUND_NAME)
        return client
