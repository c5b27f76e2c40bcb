"""CLI commands for shopping carts."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.order_view import OrderView
from storefront.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--client", "client_id", required=True, type=int, help="Client ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def cart_add(container: Container, client_id: int, product_id: int) -> None:
    """Add one unit of a product to the client's cart."""
    service = container.cart_service()
    if not service.add_to_cart(client_id, product_id):
        raise click.ClickException("Could not add the product to the cart.")

    _display_cart(service.active_cart(client_id))


@click.command("remove")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def cart_remove(container: Container, order_id: int, product_id: int) -> None:
    """Take one unit of a product out of an order."""
    if not container.cart_service().remove_from_cart(order_id, product_id):
        raise click.ClickException("Could not remove the product from the cart.")

    click.echo(f"Product #{product_id} removed from order #{order_id}.")


@click.command("show")
@click.option("--client", "client_id", required=True, type=int, help="Client ID.")
@click.pass_obj
def cart_show(container: Container, client_id: int) -> None:
    """Show the client's current cart."""
    _display_cart(container.cart_service().active_cart(client_id))


@click.command("pay")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
@click.pass_obj
def cart_pay(container: Container, order_id: int) -> None:
    """Mark an order as paid; the client's next add starts a new cart."""
    repo = container.order_repository()
    try:
        order = repo.get_by_id(order_id)
        if order is None:
            raise click.ClickException(f"Order #{order_id} not found")
        if not order.is_active:
            raise click.ClickException(f"Order #{order_id} is already paid.")
        repo.mark_paid(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} marked as paid.")


def _display_cart(view: OrderView) -> None:
    """Shared formatting for displaying a cart."""
    if view.id == 0:
        click.echo("Cart is empty.")
        return

    click.echo(f"Order #{view.id}  (client #{view.client.id} {view.client.name})")
    if view.created_at is not None:
        click.echo(f"Created:  {view.created_at:%Y-%m-%d %H:%M}")
    click.echo()

    if view.is_empty:
        click.echo("  No products yet.")
    else:
        click.echo(f"  {'ID':<5} {'Product':<20} {'Qty':>5} {'Price':>12} {'Total':>12}")
        click.echo(f"  {'-'*58}")
        for line in view.products:
            click.echo(
                f"  {line.id:<5} {line.name:<20} {line.quantity:>5} "
                f"{str(line.price):>12} {str(line.line_total):>12}"
            )
        click.echo(f"  {'-'*58}")

    click.echo(f"  {'Order Total':<32} {str(view.total_value):>26}")
