"""Statement command."""

from decimal import Decimal

import click
from ledgerflow.cli.client_resolution import resolve_client_or_exit
from ledgerflow.cli.error_handling import handle_domain_error
from ledgerflow.domain.client import ClientService
from ledgerflow.domain.entities import Section, SectionStatement
from ledgerflow.domain.errors import DomainError
from ledgerflow.domain.report import ReportService

SECTION_TITLES = {
    Section.ASSET: "ASSETS",
    Section.LIABILITY: "LIABILITIES",
    Section.EQUITY: "EQUITY",
    Section.REVENUE: "REVENUE",
    Section.EXPENSE: "EXPENSES",
    Section.UNCLASSIFIED: "UNCLASSIFIED",
}

INDENT_SIZE = 4


def _row(label: str, amount: Decimal, indent: int = 0) -> str:
    indent_str = " " * (INDENT_SIZE * indent)
    return f"{indent_str}{label:<{50 - INDENT_SIZE * indent}} {amount:>20,.2f}"


def _display_section(section: SectionStatement, detail: bool) -> None:
    click.echo()
    click.echo(SECTION_TITLES[section.section])
    for group in section.groups:
        click.echo(_row(group.name, group.total, indent=1))
        if detail:
            for line in group.lines:
                label = f"{line.code} {line.name}".strip()
                click.echo(_row(label, line.balance, indent=2))
    click.echo(_row(f"Total {SECTION_TITLES[section.section].lower()}", section.total))


@click.command("statement")
@click.argument("client", metavar="CLIENT")
@click.option("--detail", is_flag=True, help="List the lines of each category")
@click.pass_context
def show_statement(ctx, client: str, detail: bool):
    """Show the client's balance sheet and income statement.

    Unclassified lines are listed last when there are any.
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = ReportService(db)

    try:
        statement = service.build_statement(client_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _display_section(statement.section(Section.ASSET), detail)
    _display_section(statement.section(Section.LIABILITY), detail)
    _display_section(statement.section(Section.EQUITY), detail)
    click.echo(_row("Net result for the period", statement.net_result, indent=1))
    click.echo(_row("Equity including result", statement.equity_with_result))
    click.echo()
    click.echo(_row("LIABILITIES AND EQUITY", statement.liabilities_and_equity))

    _display_section(statement.section(Section.REVENUE), detail)
    _display_section(statement.section(Section.EXPENSE), detail)
    click.echo()
    click.echo(_row("NET RESULT", statement.net_result))

    unclassified = statement.section(Section.UNCLASSIFIED)
    if unclassified.groups:
        _display_section(unclassified, detail)


def register_commands(cli):
    """Register statement command with main CLI."""
    cli.add_command(show_statement)
