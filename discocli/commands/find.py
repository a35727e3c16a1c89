"""Find command for listing matching JDK packages."""

from __future__ import annotations

import sys

import click
import structlog
from rich.table import Table

from discocli.commands.common import (
    PKG_COLUMNS,
    _get_context_objects,
    _output_json,
    pkg_row,
    pkg_summary,
    report_no_package,
    selection_options,
)
from discocli.core.disco import DiscoClient
from discocli.core.errors import DiscoError, NoPackageFoundError
from discocli.core.query import Mode, resolve_criteria
from discocli.core.selector import resolve

logger = structlog.get_logger()


@click.command()
@selection_options
@click.pass_context
def find(
    ctx: click.Context,
    distribution: str | None,
    version: str | None,
    operating_system: str | None,
    libc_type: str | None,
    architecture: str | None,
    package_type: str | None,
    archive_type: str | None,
    include_ea: bool,
    javafx_bundled: bool,
    latest: bool,
) -> None:
    """Find packages of a distribution and version.

    Options left out are not constrained, so e.g. every OS is listed
    unless -os is given.
    """
    config, console, verbose, debug = _get_context_objects(ctx)

    try:
        criteria = resolve_criteria(
            Mode.FIND,
            distribution=distribution,
            version=version,
            operating_system=operating_system,
            libc_type=libc_type,
            architecture=architecture,
            package_type=package_type,
            archive_type=archive_type,
            include_ea=include_ea,
            javafx_bundled=javafx_bundled,
            latest=latest,
        )

        with DiscoClient(config.disco_config()) as client:
            pkgs = resolve(client, criteria)

        if config.output_format == "json":
            _output_json([pkg_summary(p) for p in pkgs])
        elif config.output_format == "plain":
            for pkg in pkgs:
                console.print(pkg.to_cli_string(), markup=False, highlight=False)
        else:
            table = Table(title=f"Packages found ({len(pkgs)})")
            for name, style in PKG_COLUMNS:
                table.add_column(name, style=style)
            for pkg in pkgs:
                table.add_row(*pkg_row(pkg))
            console.print(table)
            if verbose:
                for pkg in pkgs:
                    console.print(pkg.to_cli_string(), markup=False, highlight=False)

    except NoPackageFoundError as e:
        logger.error("package_not_found", distribution=distribution, version=version)
        report_no_package(e, console, config.output_format)
        sys.exit(1)
    except DiscoError as e:
        logger.error("find_failed", error=str(e))
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    except Exception as e:
        logger.error("find_failed", error=str(e))
        console.print(f"[red]Error finding packages: {e}[/red]")
        sys.exit(1)
