"""Document import command."""

import click
from ledgerflow.cli.client_resolution import resolve_client_or_exit
from ledgerflow.cli.error_handling import handle_domain_error
from ledgerflow.domain.client import ClientService
from ledgerflow.domain.document_import import DocumentImportService
from ledgerflow.domain.entities import ColumnMapping
from ledgerflow.domain.errors import DomainError
from ledgerflow.oracle import FileOracle

_ANSWER_FILE = click.Path(exists=True, dir_okay=False)


def _explicit_mapping(
    name_col: int | None,
    code_col: int | None,
    debit_col: int | None,
    credit_col: int | None,
    balance_col: int | None,
    start_row: int,
) -> ColumnMapping | None:
    """Build a column mapping from CLI options, or None if none were given."""
    columns = (name_col, code_col, debit_col, credit_col, balance_col)
    if all(col is None for col in columns):
        return None
    if name_col is None:
        raise click.UsageError("--name-col is required when giving column indices")
    return ColumnMapping(
        name_index=name_col,
        code_index=code_col,
        debit_index=debit_col,
        credit_index=credit_col,
        balance_index=balance_col,
        start_row=start_row,
    )


@click.command("import")
@click.argument("client", metavar="CLIENT")
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option("--mapping", "mapping_file", type=_ANSWER_FILE, help="JSON column mapping answer")
@click.option(
    "--classification",
    "classification_file",
    type=_ANSWER_FILE,
    help="JSON classification answer (omit to leave lines unclassified)",
)
@click.option("--lines", "lines_file", type=_ANSWER_FILE, help="JSON extracted lines answer for non-tabular documents")
@click.option("--name-col", type=int, help="Account name column index (0-based)")
@click.option("--code-col", type=int, help="Account code column index (0-based)")
@click.option("--debit-col", type=int, help="Debit column index (0-based)")
@click.option("--credit-col", type=int, help="Credit column index (0-based)")
@click.option("--balance-col", type=int, help="Balance column index (0-based)")
@click.option("--start-row", type=int, default=0, show_default=True, help="First data row (0-based)")
@click.option("--mime-type", help="Document mime type (guessed from the file name by default)")
@click.pass_context
def import_document(
    ctx,
    client: str,
    document: str,
    mapping_file: str | None,
    classification_file: str | None,
    lines_file: str | None,
    name_col: int | None,
    code_col: int | None,
    debit_col: int | None,
    credit_col: int | None,
    balance_col: int | None,
    start_row: int,
    mime_type: str | None,
):
    """Import a trial balance document, replacing the client's lines.

    Spreadsheets (CSV, TSV, XLSX) are read with explicit column indices or a
    column mapping answer. Other documents need an extracted lines answer.

    Examples:
        ledgerflow import "Acme SA" balance.xlsx --mapping mapping.json --classification classes.json
        ledgerflow import 1 balance.csv --code-col 0 --name-col 1 --balance-col 2 --start-row 1
        ledgerflow import 1 balance.pdf --lines lines.json --classification classes.json
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    mapping = _explicit_mapping(name_col, code_col, debit_col, credit_col, balance_col, start_row)

    oracle = FileOracle(
        mapping_path=mapping_file,
        classification_path=classification_file,
        lines_path=lines_file,
    )
    service = DocumentImportService(db, oracle)

    try:
        result = service.import_document(
            client_id, document, mapping=mapping, mime_type=mime_type
        )
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)

    if result["imported"] == 0:
        click.echo("No usable rows found; existing lines were kept.")
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} lines ({result['source']})")
    click.echo(f"  Unclassified: {result['unclassified']}")
    click.echo(f"  Guidance: {result['guidance']}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_document)
