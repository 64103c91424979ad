"""CLI utilities."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from sourceref.backend.http import HttpAdtBackend
from sourceref.backend.memory import InMemoryBackend
from sourceref.backend.protocol import AdtBackend
from sourceref.config.loader import load_config
from sourceref.config.models import SourceRefConfig
from sourceref.core.errors import ConfigError, ErrorCode, ResolverError, SourceRefError
from sourceref.core.logging import configure_logging

EXIT_FAILURE = 1
EXIT_INVALID_REF = 2

fixture_option = click.option(
    "--fixture",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Resolve against a YAML object catalog instead of the configured gateway",
)

json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON")


def load_cli_config(*, verbose: bool = False) -> SourceRefConfig:
    """Load configuration and route logging through its outputs."""
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(e.message) from e
    configure_logging(config=config.logging, verbose=verbose)
    return config


@asynccontextmanager
async def open_backend(config: SourceRefConfig, fixture: Path | None) -> AsyncIterator[AdtBackend]:
    """Yield the fixture catalog when given, else an HTTP gateway client."""
    if fixture is not None:
        try:
            catalog = InMemoryBackend.from_yaml(fixture)
        except ConfigError as e:
            raise click.ClickException(e.message) from e
        yield catalog
        return
    async with HttpAdtBackend(config.backend) as backend:
        yield backend


def _candidate_table(candidates: list[str]) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1), pad_edge=False)
    table.add_column(style="cyan")
    for candidate in candidates:
        table.add_row(f"• {candidate}")
    return table


def echo_json(payload: dict[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2))


def fail(error: SourceRefError, *, as_json: bool) -> None:
    """Report a typed error and exit non-zero."""
    exit_code = EXIT_INVALID_REF if error.code is ErrorCode.INVALID_REF else EXIT_FAILURE
    if as_json:
        echo_json({"ok": False, "error": error.to_dict()})
        raise click.exceptions.Exit(exit_code)

    console = Console(stderr=True)
    console.print(f"[red]✗[/red] {error.message}")
    if isinstance(error, ResolverError) and error.candidates:
        console.print("[bold]Candidates:[/bold]")
        console.print(_candidate_table(error.candidates))
    raise click.exceptions.Exit(exit_code)
