"""sourceref CLI - srcref command."""

import click

from sourceref.cli.resolve import resolve_command, show_command
from sourceref.cli.route import route_command
from sourceref.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="srcref")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """sourceref - resolve pasted references to ABAP objects."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    # Baseline until a command loads its configuration
    configure_logging(level="WARNING", verbose=verbose)


cli.add_command(route_command, name="route")
cli.add_command(resolve_command, name="resolve")
cli.add_command(show_command, name="show")


if __name__ == "__main__":
    cli()
