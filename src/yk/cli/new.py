"""yk new — add a command to simple_commands.json interactively."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from yk.catalog import SnippetDefinition
from yk.cli.errors import err_simple_commands_invalid
from yk.config import default_roots

console = Console()


def _ask(text: str) -> str:
    return typer.prompt(text, default="", show_default=False).strip()


def _load_existing(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    content = path.read_text(encoding="utf-8")
    if not content.strip():
        return {}
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        console.print(err_simple_commands_invalid(path, str(exc)))
        raise typer.Exit(1) from None
    if not isinstance(data, dict):
        console.print(err_simple_commands_invalid(path, "expected a JSON object"))
        raise typer.Exit(1)
    return data


def new_cmd(
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Configuration directory (default: ~/.config/yk)."),
    ] = None,
) -> None:
    """Create a new simple command."""
    path = default_roots(config_dir).simple_commands_file

    name = _ask("Enter command name")
    if not name:
        console.print("[red]Error:[/] Command name cannot be empty.")
        raise typer.Exit(1)

    labels = _ask("Enter command labels (space-separated)").split()
    description = _ask("Enter command description") or None
    executable = _ask("Enter executable path (optional)") or None
    console.print("[dim]Simple commands do not have entry points.[/]")
    args = _ask("Enter command arguments (space-separated, optional)").split()
    shell = typer.confirm("Execute in shell?", default=False)

    snippet = SnippetDefinition(
        labels=labels,
        description=description,
        executable=Path(executable) if executable else None,
        args=args,
        shell=shell,
    )

    data = _load_existing(path)
    if name in data and not typer.confirm(
        f"Command '{name}' already exists, overwrite?", default=False
    ):
        console.print(f"[dim]Cancelled creation of command '{escape(name)}'.[/]")
        raise typer.Exit(0)

    data[name] = snippet.to_dict()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    console.print(
        f"[green]✓[/] Created simple command '{escape(name)}' and saved to {escape(str(path))}"
    )
