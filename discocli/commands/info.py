"""Info command listing the values the catalog understands."""

from __future__ import annotations

import click
from rich.table import Table

from discocli.commands.common import _get_context_objects, _output_json
from discocli.core.types import Architecture, ArchiveType, Distro, OperatingSystem, PackageType


@click.command()
@click.option("--maintained", is_flag=True, help="Only list maintained distributions")
@click.pass_context
def info(ctx: click.Context, maintained: bool) -> None:
    """List supported distributions, operating systems and other values."""
    config, console, verbose, debug = _get_context_objects(ctx)

    distros = Distro.maintained_distros() if maintained else Distro.all()
    values = {
        "operating_systems": [o.value for o in OperatingSystem],
        "architectures": [a.value for a in Architecture],
        "archive_types": [a.value for a in ArchiveType],
        "package_types": [p.value for p in PackageType],
    }

    if config.output_format == "json":
        _output_json({
            "distributions": [
                {"api_string": d.value, "label": d.label, "maintained": d.maintained}
                for d in distros
            ],
            **values,
        })
        return

    if config.output_format == "plain":
        console.print("Distributions:")
        for d in distros:
            console.print(f"  {d.value} ({d.label})", markup=False, highlight=False)
        for key, tokens in values.items():
            console.print(f"{key.replace('_', ' ').capitalize()}: {', '.join(tokens)}", highlight=False)
        return

    table = Table(title="Distributions")
    table.add_column("Parameter", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Maintained")
    for d in distros:
        table.add_row(d.value, d.label, "yes" if d.maintained else "no")
    console.print(table)

    values_table = Table(title="Supported values")
    values_table.add_column("Option", style="cyan")
    values_table.add_column("Values")
    values_table.add_row("-os", ", ".join(values["operating_systems"]))
    values_table.add_row("-arc", ", ".join(values["architectures"]))
    values_table.add_row("-at", ", ".join(values["archive_types"]))
    values_table.add_row("-pt", ", ".join(values["package_types"]))
    console.print(values_table)
