"""Client record as seen by the storefront."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError

NOT_FOUND_NAME = "Client not found"


@dataclass(frozen=True)
class Client:
    """A registered client. Orders reference clients but never change them."""

    id: int
    name: str
    phone: str = ""

    @staticmethod
    def validate(name: str, phone: str) -> tuple[str, str]:
        """Normalize user-supplied fields, rejecting an empty name."""
        if not name or not name.strip():
            raise ValidationError("Client name is required")
        return name.strip(), (phone or "").strip()

    @staticmethod
    def placeholder(client_id: int = 0, name: str = "") -> Client:
        return Client(id=client_id, name=name, phone="")
