"""srcref route command - classify a reference without resolving it."""

import click

from sourceref.cli.utils import echo_json, json_option
from sourceref.refs.routing import route_ref


@click.command()
@click.argument("ref")
@json_option
def route_command(ref: str, as_json: bool) -> None:
    """Show whether REF is an ADT object or a workspace path."""
    route = route_ref(ref)
    if as_json:
        echo_json(
            {
                "kind": route.kind.value,
                "normalized_ref": route.normalized_ref,
                "display_language": route.display_language,
            }
        )
        return

    click.echo(f"Kind: {route.kind.value}")
    click.echo(f"Ref: {route.normalized_ref}")
    click.echo(f"Language: {route.display_language}")
