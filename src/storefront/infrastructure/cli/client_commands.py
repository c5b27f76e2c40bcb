"""CLI commands for the client directory."""

from __future__ import annotations

import click

from storefront.application.manage_clients import (
    CreateClientHandler,
    DeleteClientHandler,
    FindClientHandler,
    UpdateClientHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--name", required=True, help="Client name.")
@click.option("--phone", default="", help="Phone number.")
@click.pass_obj
def client_add(container: Container, name: str, phone: str) -> None:
    """Register a new client."""
    handler = CreateClientHandler(container.client_repository())

    try:
        created = handler.handle(name=name, phone=phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Client #{created.id} '{created.name}' added")


@click.command("list")
@click.pass_obj
def client_list(container: Container) -> None:
    """List all clients."""
    try:
        clients = container.client_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not clients:
        click.echo("No clients found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Phone':<16}")
    click.echo("-" * 48)
    for c in clients:
        click.echo(f"{c.id:<6} {c.name:<24} {c.phone:<16}")


@click.command("show")
@click.option("--id", "client_id", required=True, type=int, help="Client ID.")
@click.pass_obj
def client_show(container: Container, client_id: int) -> None:
    """Show a single client."""
    handler = FindClientHandler(container.client_repository())

    try:
        found = handler.handle(client_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Client #{found.id}: {found.name}")
    if found.phone:
        click.echo(f"Phone:  {found.phone}")


@click.command("update")
@click.option("--id", "client_id", required=True, type=int, help="Client ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--phone", default="", help="New phone number.")
@click.pass_obj
def client_update(container: Container, client_id: int, name: str, phone: str) -> None:
    """Change a client's name and phone."""
    handler = UpdateClientHandler(container.client_repository())

    try:
        handler.handle(client_id=client_id, name=name, phone=phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Client #{client_id} updated.")


@click.command("delete")
@click.option("--id", "client_id", required=True, type=int, help="Client ID.")
@click.pass_obj
def client_delete(container: Container, client_id: int) -> None:
    """Delete a client without orders."""
    handler = DeleteClientHandler(container.client_repository())

    try:
        handler.handle(client_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Client #{client_id} deleted.")
