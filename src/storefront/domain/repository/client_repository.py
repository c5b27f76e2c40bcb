"""Abstract repository for Client records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.client import Client


class ClientRepository(ABC):

    @abstractmethod
    def get_by_id(self, client_id: int) -> Client | None:
        """Return a client by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Client]:
        """Return every client."""

    @abstractmethod
    def add(self, name: str, phone: str) -> Client:
        """Insert a client and return it with its store-assigned ID."""

    @abstractmethod
    def update(self, client: Client) -> None:
        """Overwrite name and phone of an existing client."""

    @abstractmethod
    def delete(self, client_id: int) -> None:
        """Remove a client."""

    @abstractmethod
    def has_orders(self, client_id: int) -> bool:
        """True if any order, paid or not, references the client."""
