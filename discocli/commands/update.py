"""Update command checking an installed JDK for newer builds."""

from __future__ import annotations

import sys

import click
import structlog
from rich.table import Table

from discocli.commands.common import PKG_COLUMNS, _get_context_objects, _output_json, pkg_row, pkg_summary
from discocli.core.disco import DiscoClient
from discocli.core.errors import DiscoError
from discocli.core.updates import DESCRIPTOR_FORMAT, check_for_updates, parse_update_descriptor

logger = structlog.get_logger()


@click.command()
@click.argument("descriptor", type=str)
@click.pass_context
def update(ctx: click.Context, descriptor: str) -> None:
    """Check an installed JDK for updates.

    DESCRIPTOR has the form distro,version,os,arch,packageType[,fx] as
    printed by ``discocli --output plain detect``.
    """
    config, console, verbose, debug = _get_context_objects(ctx)

    try:
        installed = parse_update_descriptor(descriptor)
        with DiscoClient(config.disco_config()) as client:
            updates = check_for_updates(client, installed)
    except DiscoError as e:
        logger.error("update_check_failed", descriptor=descriptor, error=str(e))
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print(f"Expected format: {DESCRIPTOR_FORMAT}", markup=False)
        sys.exit(1)
    except Exception as e:
        logger.error("update_check_failed", descriptor=descriptor, error=str(e))
        console.print(f"[red]Error checking for updates: {e}[/red]")
        sys.exit(1)

    if config.output_format == "json":
        _output_json({
            "installed": installed.to_descriptor(),
            "updates": [pkg_summary(p) for p in updates],
        })
        return

    if config.output_format == "plain":
        for pkg in updates:
            console.print(pkg.to_cli_string(), markup=False, highlight=False)
        return

    if not updates:
        console.print(f"[green]No updates available for {installed.distribution} {installed.version}[/green]")
        return

    table = Table(title=f"Updates for {installed.distribution} {installed.version}")
    for name, style in PKG_COLUMNS:
        table.add_column(name, style=style)
    for pkg in updates:
        table.add_row(*pkg_row(pkg))
    console.print(table)
    for pkg in updates:
        console.print(pkg.to_cli_string(), markup=False, highlight=False)
