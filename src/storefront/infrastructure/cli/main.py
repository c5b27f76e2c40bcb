import click

from storefront.infrastructure.bootstrap import build_container
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_pay,
    cart_remove,
    cart_show,
)
from storefront.infrastructure.cli.client_commands import (
    client_add,
    client_delete,
    client_list,
    client_show,
    client_update,
)
from storefront.infrastructure.cli.db_commands import db_init
from storefront.infrastructure.cli.product_commands import product_add, product_list
from storefront.infrastructure.config import load_settings
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: clients, products and shopping carts"""
    if ctx.obj is None:
        try:
            settings = load_settings()
        except ValueError as exc:
            raise click.ClickException(str(exc))
        configure_logging(settings)
        ctx.obj = build_container(settings)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def client() -> None:
    """Manage clients."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


# Register subcommands
db.add_command(db_init)
client.add_command(client_add)
client.add_command(client_delete)
client.add_command(client_list)
client.add_command(client_show)
client.add_command(client_update)
product.add_command(product_add)
product.add_command(product_list)
cart.add_command(cart_add)
cart.add_command(cart_pay)
cart.add_command(cart_remove)
cart.add_command(cart_show)
