"""CLI commands for the database itself."""

from __future__ import annotations

import click
from sqlalchemy.exc import SQLAlchemyError

from storefront.application.add_product import AddProductHandler
from storefront.application.manage_clients import CreateClientHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.persistence.schema import create_schema

SAMPLE_CLIENTS = [
    ("Ana Souza", "11 98888-1111"),
    ("Bruno Lima", "21 97777-2222"),
]

SAMPLE_PRODUCTS = [
    ("Coffee Mug", "24.90", "Ceramic mug, 350 ml", "mug.png"),
    ("Notebook", "15.50", "A5 dotted notebook", "notebook.png"),
    ("Tote Bag", "39.00", "Cotton tote bag", "tote.png"),
]


@click.command("init")
@click.option("--seed", is_flag=True, default=False, help="Insert sample clients and products.")
@click.pass_obj
def db_init(container: Container, seed: bool) -> None:
    """Create the tables (existing tables are left untouched)."""
    try:
        create_schema(container.engine)
    except SQLAlchemyError as exc:
        raise click.ClickException(f"Could not create schema: {exc}")
    click.echo("Schema ready.")

    if not seed:
        return

    add_client = CreateClientHandler(container.client_repository())
    add_product = AddProductHandler(container.product_repository())
    try:
        for name, phone in SAMPLE_CLIENTS:
            add_client.handle(name=name, phone=phone)
        for name, price, description, image in SAMPLE_PRODUCTS:
            add_product.handle(name=name, price=price, description=description, image=image)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Seeded {len(SAMPLE_CLIENTS)} clients and {len(SAMPLE_PRODUCTS)} products."
    )
