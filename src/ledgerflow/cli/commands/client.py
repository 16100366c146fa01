"""Client management commands."""

import click
from ledgerflow.cli.client_resolution import resolve_client_or_exit
from ledgerflow.cli.error_handling import handle_domain_error
from ledgerflow.domain.client import ClientService
from ledgerflow.domain.errors import DomainError


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--tax-id", help="Tax identifier (e.g., CUIT)")
@click.option("--industry", help="Industry description")
@click.pass_context
def create_client(ctx, name: str, tax_id: str | None, industry: str | None):
    """Create a new client.

    Examples:
        ledgerflow client create "Acme SA"
        ledgerflow client create "Acme SA" --tax-id 30-12345678-9 --industry Retail
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        client_id = service.create_client(name=name, tax_id=tax_id, industry=industry)
        click.echo(f"Created client '{name.strip()}' (ID: {client_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    db = ctx.obj["db"]
    service = ClientService(db)

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 60)
    for c in clients:
        tax_id = c.tax_id or "-"
        click.echo(f"ID: {c.id:3d} | {c.name:24s} | Tax ID: {tax_id}")


@client_group.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client: str):
    """Show client details.

    CLIENT can be a client name or ID.
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    c = service.get_client(client_id)
    line_count = len(db.get_lines(client_id))
    click.echo(f"Client:       {c.name} (ID: {c.id})")
    click.echo(f"Tax ID:       {c.tax_id or '-'}")
    click.echo(f"Industry:     {c.industry or '-'}")
    click.echo(f"Regulations:  {'custom' if c.custom_regulations else 'none'}")
    click.echo(f"Lines:        {line_count}")
    click.echo(f"Last updated: {c.last_updated:%Y-%m-%d %H:%M}")


@client_group.command("update")
@click.argument("client", metavar="CLIENT")
@click.option("--name", help="New client name")
@click.option("--tax-id", help="New tax identifier")
@click.option("--industry", help="New industry description")
@click.pass_context
def update_client(
    ctx, client: str, name: str | None, tax_id: str | None, industry: str | None
) -> None:
    """Update client details.

    CLIENT can be a client name or ID. Only provided fields are changed.

    Examples:
        ledgerflow client update "Acme SA" --name "Acme Holdings SA"
        ledgerflow client update 1 --industry Logistics
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    if name is None and tax_id is None and industry is None:
        click.echo("Error: Nothing to update. Use --name, --tax-id or --industry.", err=True)
        ctx.exit(1)

    try:
        service.update_client(client_id, name=name, tax_id=tax_id, industry=industry)
        click.echo(f"Updated client {client_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def delete_client(ctx, client: str) -> None:
    """Delete a client with its lines and import history.

    CLIENT can be a client name or ID.
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)
    client_obj = service.get_client(client_id)

    # Confirm deletion
    if not click.confirm(
        f"Are you sure you want to delete client '{client_obj.name}' (ID: {client_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_id)
        click.echo(f"Deleted client '{client_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@client_group.command("set-regulations")
@click.argument("client", metavar="CLIENT")
@click.option(
    "--file",
    "regulations_file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Text file with the client's chart of accounts or regulations",
)
@click.pass_context
def set_regulations(ctx, client: str, regulations_file: str) -> None:
    """Set the client's custom classification regulations.

    Custom regulations take precedence over the global model when lines are
    classified, and switch statement ordering to regulation-aware mode.
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    with open(regulations_file, encoding="utf-8") as f:
        text = f.read()

    try:
        service.set_custom_regulations(client_id, text)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if text.strip():
        click.echo(f"Custom regulations set for client {client_id}")
    else:
        click.echo(f"Regulations file is empty; cleared regulations for client {client_id}")


@client_group.command("clear-regulations")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def clear_regulations(ctx, client: str) -> None:
    """Remove the client's custom regulations."""
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    try:
        service.set_custom_regulations(client_id, None)
        click.echo(f"Cleared regulations for client {client_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@client_group.command("files")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def list_files(ctx, client: str) -> None:
    """List documents imported for a client."""
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    files = service.list_imported_files(client_id)
    if not files:
        click.echo("No imported files.")
        return

    click.echo("\nImported files:")
    click.echo("-" * 60)
    for f in files:
        click.echo(
            f"{f.imported_at:%Y-%m-%d %H:%M} | {f.name:30s} | {f.line_count} lines"
        )


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
