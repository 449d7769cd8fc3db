"""yk rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from yk.cli.errors import err_no_config
    console.print(err_no_config(roots.config_file, str(exc)))
    raise typer.Exit(1)
"""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape


def err_no_config(config_file: Path, reason: str) -> str:
    """Settings file missing or invalid."""
    return (
        f"[red]Error:[/] Cannot load configuration '{escape(str(config_file))}'.\n"
        f"  {escape(reason)}\n"
        "  Run:  yk init"
    )


def err_no_commands(simple_commands_file: Path, plugins_dir: Path) -> str:
    """Catalog is empty — nothing to select."""
    return (
        "[red]Error:[/] No commands found.\n\n"
        "  Checklist:\n"
        f"    [ ] Add a simple command:  yk new   ({escape(str(simple_commands_file))})\n"
        f"    [ ] Or add a plugin:  {escape(str(plugins_dir))}/<name>/<name>.json"
    )


def err_selector_not_found(executable: str, reason: str) -> str:
    """Selector program could not be started."""
    return (
        f"[red]Error:[/] Cannot start selector '{escape(executable)}'.\n"
        f"  {escape(reason)}\n"
        "  Install fzf or set selector.executable in config.yaml (or export YK_SELECTOR=...)."
    )


def err_selection(reason: str) -> str:
    """Selector reply could not be mapped to a command."""
    return (
        f"[red]Error:[/] {escape(reason)}\n"
        "  No command was run. Run:  yk find  to select again."
    )


def err_simple_commands_invalid(path: Path, reason: str) -> str:
    """simple_commands.json exists but cannot be updated safely."""
    return (
        f"[red]Error:[/] Cannot update '{escape(str(path))}': {escape(reason)}\n"
        "  Fix the JSON by hand, then run:  yk new"
    )


def warn_message(message: str) -> str:
    """Non-fatal problem with a source or setting."""
    return f"[yellow]Warning:[/] {escape(message)}"
