"""Line workbench commands."""

import click
from ledgerflow.cli.client_resolution import resolve_client_or_exit
from ledgerflow.cli.error_handling import handle_domain_error
from ledgerflow.domain.client import ClientService
from ledgerflow.domain.entities import Section
from ledgerflow.domain.errors import DomainError
from ledgerflow.domain.line_editor import EditableField
from ledgerflow.domain.lines import LineService


def _resolve_line_id(ctx: click.Context, service: LineService, client_id: int, line_id: str) -> str:
    """Expand a unique line id prefix to the full id."""
    matches = [line.id for line in service.get_lines(client_id) if line.id.startswith(line_id)]
    if line_id in matches:
        return line_id
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        click.echo(f"Error: Line id prefix '{line_id}' is ambiguous", err=True)
        ctx.exit(1)
    return line_id


@click.group()
def line_group():
    """Review and edit a client's lines."""
    pass


@line_group.command("list")
@click.argument("client", metavar="CLIENT")
@click.option("--unclassified", is_flag=True, help="Only show unclassified lines")
@click.pass_context
def list_lines(ctx, client: str, unclassified: bool):
    """List the client's lines in document order.

    Manually edited lines are marked with '*'.
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = LineService(db)

    lines = service.get_lines(client_id)
    if unclassified:
        lines = [line for line in lines if line.section == Section.UNCLASSIFIED]
    if not lines:
        click.echo("No lines found.")
        return

    click.echo(
        f"\n{'ID':8s}   {'Code':10s} {'Name':30s} {'Section':12s} {'Category':24s} "
        f"{'Debit':>12s} {'Credit':>12s} {'Balance':>12s}"
    )
    click.echo("-" * 132)
    for line in lines:
        marker = "*" if line.manual_override else " "
        name = f"[{line.name}]" if line.is_group else line.name
        click.echo(
            f"{line.id[:8]} {marker} {line.code[:10]:10s} {name[:30]:30s} "
            f"{line.section.value:12s} {line.category[:24]:24s} "
            f"{line.debit:>12,.2f} {line.credit:>12,.2f} {line.balance:>12,.2f}"
        )


@line_group.command("add")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def add_line(ctx, client: str):
    """Insert a blank line at the top of the client's lines."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = LineService(db)

    try:
        line = service.add_line(client_id)
        click.echo(f"Added line {line.id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@line_group.command("edit")
@click.argument("client", metavar="CLIENT")
@click.argument("line_id", metavar="LINE_ID")
@click.option(
    "--field",
    required=True,
    type=click.Choice([f.value for f in EditableField]),
    help="Field to edit",
)
@click.option("--value", required=True, help="New value")
@click.pass_context
def edit_line(ctx, client: str, line_id: str, field: str, value: str):
    """Edit one field of a line.

    LINE_ID can be the full id or a unique prefix of it. Editing debit or
    credit re-derives the balance.

    Examples:
        ledgerflow line edit "Acme SA" 3f2a9c --field section --value LIABILITY
        ledgerflow line edit 1 3f2a9c --field debit --value 1250.00
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = LineService(db)
    line_id = _resolve_line_id(ctx, service, client_id, line_id)

    try:
        line = service.edit_line(client_id, line_id, EditableField(field), value)
        click.echo(f"Updated {field} of line {line.id[:8]} ({line.name})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@line_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.argument("line_id", metavar="LINE_ID")
@click.pass_context
def delete_line(ctx, client: str, line_id: str):
    """Delete a line."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = LineService(db)
    line_id = _resolve_line_id(ctx, service, client_id, line_id)

    try:
        service.delete_line(client_id, line_id)
        click.echo(f"Deleted line {line_id[:8]}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register line commands with main CLI."""
    cli.add_command(line_group, name="line")
