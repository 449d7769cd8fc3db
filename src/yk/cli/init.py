"""yk init — create the configuration scaffold.

Creates:
  <config_dir>/                      (default ~/.config/yk)
  <config_dir>/config.yaml           — selector/preview/editor and dispatch settings
  <config_dir>/plugins/              — one directory per plugin
  <config_dir>/simple_commands.json  — commands added with `yk new`
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from yk.config import default_roots, write_default_config

console = Console()


def init_cmd(
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Configuration directory (default: ~/.config/yk)."),
    ] = None,
) -> None:
    """Initialize the yk configuration directory."""
    roots = default_roots(config_dir)

    roots.config_dir.mkdir(parents=True, exist_ok=True)
    roots.plugins_dir.mkdir(parents=True, exist_ok=True)
    console.print(f"  [green]✓[/] {escape(str(roots.plugins_dir))}")

    if not roots.config_file.exists():
        write_default_config(roots.config_file)
        console.print(
            f"  [green]✓[/] Created default configuration file: {escape(str(roots.config_file))}"
        )
    elif typer.confirm(
        f"Configuration file {roots.config_file} already exists, overwrite?", default=False
    ):
        write_default_config(roots.config_file)
        console.print("  [green]✓[/] Configuration file updated")
    else:
        console.print("[dim]Skipped configuration file update.[/]")

    if not roots.simple_commands_file.exists():
        roots.simple_commands_file.write_text("{}", encoding="utf-8")
        console.print(
            "  [green]✓[/] Created simple commands configuration file: "
            f"{escape(str(roots.simple_commands_file))}"
        )

    console.print("\nNext steps:")
    console.print("  1. yk new      (add a simple command)")
    console.print("  2. yk find     (pick a command to copy/run)")
