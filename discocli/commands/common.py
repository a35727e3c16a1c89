"""Helpers shared by the discocli commands."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import click
from rich.console import Console

from discocli.core.config import AppConfig
from discocli.core.errors import NoPackageFoundError
from discocli.core.pkg import Pkg
from discocli.core.utils import format_size


def _get_context_objects(ctx: click.Context) -> tuple[AppConfig, Console, bool, bool]:
    """Extract common context objects."""
    config: AppConfig = ctx.obj["config"]
    console: Console = ctx.obj["console"]
    verbose: bool = ctx.obj["verbose"]
    debug: bool = ctx.obj["debug"]
    return config, console, verbose, debug


def _output_json(data: Any) -> None:
    """Output data as JSON."""
    # Regular print to avoid Rich formatting
    print(json.dumps(data, indent=2, default=str))


def selection_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options that select packages, shared by download and find."""
    options = [
        click.option("-d", "--distribution", "distribution", type=str, help="Distribution (e.g. zulu, temurin)"),
        click.option("-v", "--version", "version", type=str, help="Java version (e.g. 17, 17.0.2)"),
        click.option("-os", "--operating-system", "operating_system", type=str, help="Operating system"),
        click.option("-lc", "--libc-type", "libc_type", type=str, help="C library type (glibc, musl, ...)"),
        click.option("-arc", "--architecture", "architecture", type=str, help="Architecture (x64, aarch64, ...)"),
        click.option("-pt", "--package-type", "package_type", type=str, help="Package type (jdk, jre)"),
        click.option("-at", "--archive-type", "archive_type", type=str, help="Archive type (tar.gz, zip, ...)"),
        click.option("-ea", "--early-access", "include_ea", is_flag=True, help="Include early access builds"),
        click.option("-fx", "--javafx", "javafx_bundled", is_flag=True, help="Only packages bundled with JavaFX"),
        click.option("--latest", "latest", is_flag=True, help="Latest build of the given version"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def pkg_summary(pkg: Pkg) -> dict[str, Any]:
    """JSON friendly view of a package."""
    return {
        "id": pkg.id,
        "distribution": pkg.distribution,
        "java_version": str(pkg.java_version),
        "distribution_version": pkg.distribution_version,
        "operating_system": pkg.operating_system,
        "lib_c_type": pkg.libc_type,
        "architecture": pkg.architecture,
        "archive_type": pkg.archive_type,
        "package_type": pkg.package_type,
        "release_status": pkg.release_status,
        "term_of_support": pkg.term_of_support,
        "javafx_bundled": pkg.javafx_bundled,
        "filename": pkg.filename,
        "size": pkg.size,
        "command": pkg.to_cli_string(),
    }


def pkg_row(pkg: Pkg) -> list[str]:
    """Table row for a package, see :data:`PKG_COLUMNS`."""
    return [
        pkg.distribution.value if pkg.distribution else "",
        str(pkg.java_version),
        pkg.operating_system.value if pkg.operating_system else "",
        pkg.libc_type.value if pkg.libc_type else "",
        pkg.architecture.value if pkg.architecture else "",
        pkg.archive_type.value if pkg.archive_type else "",
        pkg.package_type.value if pkg.package_type else "",
        "yes" if pkg.javafx_bundled else "",
        format_size(pkg.size),
        pkg.filename,
    ]


PKG_COLUMNS = [
    ("Distribution", "cyan"),
    ("Version", "green"),
    ("OS", None),
    ("Libc", None),
    ("Arch", None),
    ("Archive", None),
    ("Type", None),
    ("FX", None),
    ("Size", "magenta"),
    ("Filename", "dim"),
]


def report_no_package(error: NoPackageFoundError, console: Console, output_format: str) -> None:
    """Print the not-found message and the alternatives of the same major version."""
    if output_format == "json":
        _output_json({
            "error": str(error),
            "alternatives": [pkg_summary(p) for p in error.alternatives],
        })
        return

    console.print(f"[red]{error}[/red]")
    if not error.alternatives:
        return
    first = error.alternatives[0]
    distro = first.distribution.label if first.distribution else "the distribution"
    console.print(f"\nPackages available for {distro} for version {first.major_version}:")
    for pkg in error.alternatives:
        console.print(pkg.to_cli_string(), markup=False, highlight=False)
