"""srcref resolve / show commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import click

from sourceref.cli.utils import (
    echo_json,
    fail,
    fixture_option,
    json_option,
    load_cli_config,
    open_backend,
)
from sourceref.config.models import SourceRefConfig
from sourceref.core.errors import SourceRefError
from sourceref.core.logging import set_request_id
from sourceref.refs.routing import RefKind
from sourceref.resolver.engine import SourceRefResolver
from sourceref.resolver.models import ResolvedReference
from sourceref.session import OpenedSource, SourceSession


async def _resolve(config: SourceRefConfig, fixture: Path | None, ref: str) -> ResolvedReference:
    async with open_backend(config, fixture) as backend:
        return await SourceRefResolver(backend, config.search).resolve(ref)


async def _open(config: SourceRefConfig, fixture: Path | None, ref: str) -> OpenedSource:
    async with open_backend(config, fixture) as backend:
        return await SourceSession(backend, config.search).open(ref)


@click.command()
@click.argument("ref")
@fixture_option
@json_option
@click.pass_obj
def resolve_command(obj: dict[str, Any], ref: str, fixture: Path | None, as_json: bool) -> None:
    """Resolve REF to exactly one ADT object URI.

    REF may be an ADT URI, an abapGit file name (zcl_demo.clas.abap), a
    diff path (b/src/zcl_demo.clas.abap) or a bare object name.
    """
    config = load_cli_config(verbose=obj["verbose"])
    set_request_id()
    try:
        resolved = asyncio.run(_resolve(config, fixture, ref))
    except SourceRefError as e:
        fail(e, as_json=as_json)
        return

    if as_json:
        echo_json({"ok": True, **resolved.to_dict()})
        return
    click.echo(resolved.object_uri)


@click.command()
@click.argument("ref")
@fixture_option
@click.pass_obj
def show_command(obj: dict[str, Any], ref: str, fixture: Path | None) -> None:
    """Resolve REF and print the object's source."""
    config = load_cli_config(verbose=obj["verbose"])
    try:
        opened = asyncio.run(_open(config, fixture, ref))
    except SourceRefError as e:
        fail(e, as_json=False)
        return

    if opened.kind is RefKind.WORKSPACE_PATH:
        raise click.ClickException(
            f"'{opened.object_uri}' is a workspace file ({opened.language}); open it directly."
        )
    click.echo(opened.source or "", nl=False)
