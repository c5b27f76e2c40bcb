"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--description", default="", help="Short description.")
@click.option("--image", default="", help="Image file or URL.")
@click.pass_obj
def product_add(
    container: Container, name: str, price: str, description: str, image: str
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(container.product_repository())

    try:
        product = handler.handle(
            name=name, price=price, description=description, image=image
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List all products in the catalog."""
    try:
        products = container.product_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>12}")
    click.echo("-" * 40)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>12}")
