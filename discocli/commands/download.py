"""Download command for JDK packages."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import structlog
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from discocli.commands.common import (
    _get_context_objects,
    _output_json,
    pkg_summary,
    report_no_package,
    selection_options,
)
from discocli.core.disco import DiscoClient
from discocli.core.download import DownloadOutcome
from discocli.core.download import download as download_package
from discocli.core.errors import DiscoError, DownloadFailedError, NoPackageFoundError
from discocli.core.query import Mode, resolve_criteria
from discocli.core.selector import resolve, resolve_download_info
from discocli.core.utils import format_size, target_path

logger = structlog.get_logger()

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_ALREADY_EXISTS = 2

_OUTCOME_EXIT_CODES = {
    DownloadOutcome.SUCCESS: EXIT_SUCCESS,
    DownloadOutcome.ALREADY_EXISTS: EXIT_ALREADY_EXISTS,
    DownloadOutcome.FAILED: EXIT_FAILURE,
}


def exit_code(outcome: DownloadOutcome) -> int:
    """Internal exit code of a download outcome."""
    return _OUTCOME_EXIT_CODES[outcome]


def normalize_exit_code(code: int) -> int:
    """Process exit code; an existing download counts as success."""
    return EXIT_SUCCESS if code in (EXIT_SUCCESS, EXIT_ALREADY_EXISTS) else EXIT_FAILURE


@click.command()
@selection_options
@click.option(
    "-p",
    "--path",
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Download folder (default: current directory)",
)
@click.pass_context
def download(
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
    path: Path | None,
) -> None:
    """Download a JDK package.

    Without options the latest Zulu JDK for this machine is downloaded.
    """
    config, console, verbose, debug = _get_context_objects(ctx)
    json_output = config.output_format == "json"

    try:
        criteria = resolve_criteria(
            Mode.DOWNLOAD,
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
            pkg = resolve(client, criteria)
            info = resolve_download_info(client, pkg)
            target = target_path(path, info.filename)

            if not json_output:
                console.print(
                    f"[blue]Downloading {info.filename} ({format_size(pkg.size)}) "
                    f"from {info.direct_download_uri}[/blue]"
                )

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
                transient=True,
                disable=json_output,
            ) as progress:
                task = progress.add_task(info.filename, total=100 if pkg.size > 0 else None)
                outcome = download_package(
                    client,
                    info.direct_download_uri,
                    target,
                    pkg.size,
                    progress=lambda percent: progress.update(task, completed=percent),
                    chunk_size=config.download_chunk_size,
                )

        if outcome is DownloadOutcome.FAILED:
            raise DownloadFailedError(info.filename, info.direct_download_uri)

        if json_output:
            summary = pkg_summary(pkg)
            summary.update(path=str(target), uri=info.direct_download_uri, outcome=outcome.value)
            _output_json(summary)
        elif outcome is DownloadOutcome.ALREADY_EXISTS:
            console.print(f"[yellow]{target} already exists, nothing to download[/yellow]")
        else:
            console.print(f"[green]Successfully downloaded {target}[/green]")
            if verbose:
                console.print(pkg.to_cli_string(), markup=False, highlight=False)

    except NoPackageFoundError as e:
        logger.error("package_not_found", distribution=distribution, version=version)
        report_no_package(e, console, config.output_format)
        sys.exit(EXIT_FAILURE)
    except DiscoError as e:
        logger.error("download_failed", error=str(e))
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        logger.error("download_failed", error=str(e))
        console.print(f"[red]Error downloading package: {e}[/red]")
        sys.exit(EXIT_FAILURE)

    code = normalize_exit_code(exit_code(outcome))
    if code != EXIT_SUCCESS:
        sys.exit(code)
