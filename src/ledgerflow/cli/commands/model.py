"""Global standard model commands."""

import click
from ledgerflow.domain.global_model import GlobalModelService


@click.group()
def model_group():
    """Manage the global standard model used for all clients."""
    pass


@model_group.command("set")
@click.option(
    "--file",
    "model_file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Text file with the standard chart of accounts",
)
@click.pass_context
def set_model(ctx, model_file: str):
    """Set the global standard model.

    Clients without regulations of their own are classified against it.
    """
    service = GlobalModelService(ctx.obj["db"])

    with open(model_file, encoding="utf-8") as f:
        text = f.read()

    service.set_model(text)
    if service.get_model() is None:
        click.echo("Model file is empty; global model cleared.")
    else:
        click.echo("Global model set.")


@model_group.command("show")
@click.pass_context
def show_model(ctx):
    """Show the global standard model."""
    service = GlobalModelService(ctx.obj["db"])

    text = service.get_model()
    if text is None:
        click.echo("No global model set. Default categories are used.")
        return
    click.echo(text)


@model_group.command("clear")
@click.pass_context
def clear_model(ctx):
    """Remove the global standard model."""
    GlobalModelService(ctx.obj["db"]).clear_model()
    click.echo("Global model cleared.")


def register_commands(cli):
    """Register model commands with main CLI."""
    cli.add_command(model_group, name="model")
