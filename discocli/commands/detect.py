"""Detect command listing locally installed JDKs."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import structlog
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from discocli.commands.common import _get_context_objects, _output_json
from discocli.core.detector import DetectedInstallation, Detector

logger = structlog.get_logger()


def format_installation(installation: DetectedInstallation) -> str:
    """``[*]descriptor (path)``, the input format of ``discocli update``."""
    marker = "*" if installation.in_use else ""
    return f"{marker}{installation.to_descriptor()} ({installation.path})"


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.pass_context
def detect(ctx: click.Context, paths: tuple[Path, ...]) -> None:
    """Detect installed JDKs.

    PATHS are folders to scan; the default install folders of this
    operating system are used when none are given.
    """
    config, console, verbose, debug = _get_context_objects(ctx)
    search_paths = list(paths) + list(config.search_paths)

    try:
        detector = Detector(timeout=config.timeout)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
            disable=config.output_format != "rich",
        ) as progress:
            progress.add_task("Scanning for JDK installations...", total=None)
            installations = detector.detect(search_paths)
    except Exception as e:
        logger.error("detect_failed", error=str(e))
        console.print(f"[red]Error detecting installations: {e}[/red]")
        sys.exit(1)

    logger.info("installations_detected", count=len(installations))

    if config.output_format == "json":
        _output_json([
            {**i.model_dump(exclude={"version"}), "version": str(i.version), "descriptor": i.to_descriptor()}
            for i in installations
        ])
        return

    if config.output_format == "plain":
        for installation in installations:
            console.print(format_installation(installation), markup=False, highlight=False)
        return

    if not installations:
        console.print("[yellow]No JDK installations found[/yellow]")
        return

    table = Table(title=f"Detected installations ({len(installations)})")
    table.add_column("In use")
    table.add_column("Distribution", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("OS")
    table.add_column("Arch")
    table.add_column("FX")
    table.add_column("Feature")
    table.add_column("Path", style="dim")
    for i in installations:
        table.add_row(
            "*" if i.in_use else "",
            i.name or i.distribution,
            str(i.version),
            i.operating_system,
            i.architecture,
            "yes" if i.javafx_bundled else "",
            i.feature,
            i.path,
        )
    console.print(table)

    if verbose:
        for installation in installations:
            console.print(format_installation(installation), markup=False, highlight=False)
