"""Consistency check command."""

import click
from ledgerflow.cli.client_resolution import resolve_client_or_exit
from ledgerflow.cli.error_handling import handle_domain_error
from ledgerflow.domain.client import ClientService
from ledgerflow.domain.errors import DomainError
from ledgerflow.domain.report import ReportService


@click.command("check")
@click.argument("client", metavar="CLIENT")
@click.option("--strict", is_flag=True, help="Exit with status 1 when findings exist")
@click.pass_context
def check_lines(ctx, client: str, strict: bool):
    """Check the client's lines for inconsistencies."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = ReportService(db)

    try:
        findings = service.find_inconsistencies(client_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not findings:
        click.echo("No inconsistencies found.")
        return

    for finding in findings:
        click.echo(f"[{finding.severity.value.upper()}] {finding.id}: {finding.message}")

    if strict:
        ctx.exit(1)


def register_commands(cli):
    """Register check command with main CLI."""
    cli.add_command(check_lines)
