"""yk list — show the catalog without starting the selector."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from yk.catalog import discover_sources
from yk.cli.find import load_catalog
from yk.config import default_roots

console = Console()


def list_cmd(
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Configuration directory (default: ~/.config/yk)."),
    ] = None,
    sources: Annotated[
        bool,
        typer.Option("--sources", help="List the source files that are searched instead."),
    ] = False,
) -> None:
    """List every command in the catalog."""
    roots = default_roots(config_dir)

    if sources:
        for label, path in discover_sources(roots):
            mark = "[green]✓[/]" if path.is_file() else "[yellow]✗[/]"
            console.print(f"  {mark} {escape(label)}: {escape(str(path))}")
        return

    catalog = load_catalog(roots)

    table = Table(title="Commands", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Labels")
    table.add_column("Command")
    table.add_column("Mode", style="dim")
    table.add_column("Source", style="dim")

    for index, entry in enumerate(catalog):
        table.add_row(
            str(index),
            escape(entry.name),
            escape(" ".join(entry.labels)),
            escape(entry.complete_command),
            "shell" if entry.shell else "direct",
            escape(str(entry.source_file)),
        )

    console.print(table)
    console.print(f"\n  {len(catalog)} commands")
