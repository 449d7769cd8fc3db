"""yk CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from yk.cli.find import find_cmd
from yk.cli.init import init_cmd
from yk.cli.listing import list_cmd
from yk.cli.new import new_cmd


def _version() -> str:
    try:
        return importlib.metadata.version("yk")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"yk {_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="yk",
    help=(
        "yk — simple commands and plugin command snippets.\n\n"
        "  yk init   Create ~/.config/yk with default settings.\n"
        "  yk new    Add a simple command.\n"
        "  yk find   Pick a command, then copy/run it (default when no command is given)."
    ),
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """yk — simple commands and plugin command snippets."""
    if ctx.invoked_subcommand is None:
        find_cmd()


app.command("init")(init_cmd)
app.command("new")(new_cmd)
app.command("find")(find_cmd)
app.command("list")(list_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed yk version."""
    typer.echo(f"yk {_version()}")


if __name__ == "__main__":
    app()
