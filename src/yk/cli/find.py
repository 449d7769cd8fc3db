"""yk find — pick a command in the selector and dispatch it.

Steps:
  1. load config.yaml
  2. build the catalog from simple_commands.json and every plugin
  3. feed it to the selector, decode the chosen line back to an index
  4. edit (--edit), or copy and/or run the chosen command

Usage:
  yk find
  yk find --edit
"""

from __future__ import annotations

import warnings
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from yk.catalog import Catalog, build_catalog
from yk.cli.errors import (
    err_no_commands,
    err_no_config,
    err_selection,
    err_selector_not_found,
    warn_message,
)
from yk.config import ConfigError, Roots, YkConfig, default_roots, load_config
from yk.dispatch import dispatch
from yk.selector import (
    SelectorNotFoundError,
    SelectorProtocolError,
    decode_reply,
    encode_catalog,
    run_selector,
)

console = Console()


@contextmanager
def reported_warnings() -> Iterator[None]:
    """Show warnings raised inside the block as yellow console lines."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            yield
        finally:
            for w in caught:
                console.print(warn_message(str(w.message)))


def load_settings(roots: Roots) -> YkConfig:
    """Load config.yaml or exit 1 with an actionable message."""
    try:
        with reported_warnings():
            return load_config(roots)
    except ConfigError as exc:
        console.print(err_no_config(roots.config_file, str(exc)))
        raise typer.Exit(1) from None


def load_catalog(roots: Roots) -> Catalog:
    """Build the catalog or exit 1 when it is empty."""
    with reported_warnings():
        catalog = build_catalog(roots)
    if catalog.is_empty:
        console.print(err_no_commands(roots.simple_commands_file, roots.plugins_dir))
        raise typer.Exit(1)
    return catalog


def find_cmd(
    edit: Annotated[
        bool,
        typer.Option("--edit", "-e", help="Open the selected command's source file in the editor."),
    ] = False,
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Configuration directory (default: ~/.config/yk)."),
    ] = None,
) -> None:
    """Find a command and copy, run or edit it."""
    roots = default_roots(config_dir)
    config = load_settings(roots)
    catalog = load_catalog(roots)

    # Encode on this thread so collision warnings are reported.
    with reported_warnings():
        lines = list(encode_catalog(catalog))

    try:
        reply = run_selector(lines, config)
    except SelectorNotFoundError as exc:
        console.print(err_selector_not_found(config.selector.executable, str(exc)))
        raise typer.Exit(1) from None

    try:
        index = decode_reply(reply.returncode, reply.stdout, len(catalog))
    except SelectorProtocolError as exc:
        console.print(err_selection(str(exc)))
        raise typer.Exit(0) from None

    if index is None:
        if reply.returncode != 0:
            console.print("[dim]User cancelled selection or selector execution failed.[/]")
        else:
            console.print("[dim]No command selected.[/]")
        raise typer.Exit(0)

    dispatch(catalog[index], config, edit=edit)
