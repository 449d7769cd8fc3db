"""Dispatch a selected catalog entry: edit its source, or copy and/or run it.

Exactly one branch runs per call:

  edit     open the entry's source file in the configured editor; nothing
           is copied or executed.
  default  copy the complete command to the clipboard (dispatch.copy),
           then run it (dispatch.run), asking first when dispatch.confirm.

Failures are reported on the console and returned as a DispatchOutcome; they
never raise. Execution mode follows the entry's ``shell`` flag:

  shell=True   the whole command string goes to ``sh -c`` (``cmd /C`` on Windows)
  shell=False  the string is split on whitespace and spawned directly, so an
               argument containing spaces cannot be expressed
"""

from __future__ import annotations

import enum
import subprocess
import sys

import typer
from rich.console import Console
from rich.markup import escape

from yk.catalog.models import CatalogEntry
from yk.config import YkConfig
from yk.dispatch.clipboard import ClipboardError, ClipboardProvider, PyperclipClipboard

console = Console()

# A failed clipboard write also skips the run step.
CLIPBOARD_FAILURE_ABORTS_RUN = True


class DispatchOutcome(enum.Enum):
    EDITED = "edited"
    EDIT_FAILED = "edit_failed"
    SOURCE_MISSING = "source_missing"
    CLIPBOARD_FAILED = "clipboard_failed"
    COPIED = "copied"
    CANCELLED = "cancelled"
    EMPTY_COMMAND = "empty_command"
    RAN = "ran"
    RUN_FAILED = "run_failed"
    NOTHING = "nothing"


def command_argv(entry: CatalogEntry, platform: str | None = None) -> list[str]:
    """Return the argv that runs *entry*.

    Args:
        entry: Selected catalog entry.
        platform: ``sys.platform`` value to build for (defaults to the current one).
    """
    if entry.shell:
        if (platform or sys.platform) == "win32":
            return ["cmd", "/C", entry.complete_command]
        return ["sh", "-c", entry.complete_command]
    return entry.complete_command.split()


def confirm_run(command: str) -> bool:
    """Ask on the terminal; only an exact ``y`` (any case) confirms.

    End of input counts as an empty answer.
    """
    try:
        answer = typer.prompt(
            f"Confirm to run command: {command} (y/N)", default="", show_default=False
        )
    except (typer.Abort, EOFError):
        console.print()
        return False
    return answer.strip().lower() == "y"


def _edit(entry: CatalogEntry, config: YkConfig) -> DispatchOutcome:
    console.print(f"Editing command: [bold]{escape(entry.name)}[/]")
    console.print(f"Current command: {escape(entry.complete_command)}")

    path = entry.source_file
    if not path.exists():
        console.print(f"[red]Configuration file does not exist:[/] {escape(str(path))}")
        return DispatchOutcome.SOURCE_MISSING

    console.print(f"Opening configuration file: {escape(str(path))}")
    try:
        result = subprocess.run([config.editor.executable, str(path)], shell=False, check=False)
    except OSError as exc:
        console.print(
            f"[red]Failed to start editor[/] '{escape(config.editor.executable)}': {escape(str(exc))}"
        )
        return DispatchOutcome.EDIT_FAILED

    if result.returncode != 0:
        console.print("[red]Failed to open configuration file[/]")
        return DispatchOutcome.EDIT_FAILED

    console.print("[green]✓[/] Configuration file opened, please edit and save")
    return DispatchOutcome.EDITED


def _copy(entry: CatalogEntry, clipboard: ClipboardProvider) -> bool:
    try:
        clipboard.set_contents(entry.complete_command)
    except ClipboardError as exc:
        console.print(f"[red]Failed to copy to clipboard:[/] {escape(str(exc))}")
        return False
    console.print(f"[green]✓[/] Copied to clipboard: {escape(entry.complete_command)}")
    return True


def _run(entry: CatalogEntry) -> DispatchOutcome:
    argv = command_argv(entry)
    if not entry.complete_command.strip() or not argv:
        console.print(f"[red]Command '{escape(entry.name)}' is empty, nothing to execute[/]")
        return DispatchOutcome.EMPTY_COMMAND

    try:
        result = subprocess.run(argv, shell=False, check=False)
    except OSError as exc:
        console.print(f"[red]Command execution failed:[/] {escape(str(exc))}")
        return DispatchOutcome.RUN_FAILED

    if result.returncode != 0:
        console.print(f"[red]Command execution failed[/] (exit status {result.returncode})")
        return DispatchOutcome.RUN_FAILED
    return DispatchOutcome.RAN


def dispatch(
    entry: CatalogEntry,
    config: YkConfig,
    *,
    edit: bool = False,
    clipboard: ClipboardProvider | None = None,
) -> DispatchOutcome:
    """Act on *entry* according to *config* and the *edit* flag.

    Args:
        entry: The selected catalog entry.
        config: Loaded settings; only ``editor`` and ``dispatch`` are used.
        edit: Open the entry's source file instead of copying/running.
        clipboard: Clipboard to write to; defaults to the system clipboard.

    Returns:
        What happened, as a DispatchOutcome.
    """
    if edit:
        return _edit(entry, config)

    copied = False
    if config.dispatch.copy:
        copied = _copy(entry, clipboard if clipboard is not None else PyperclipClipboard())
        if not copied and CLIPBOARD_FAILURE_ABORTS_RUN:
            return DispatchOutcome.CLIPBOARD_FAILED

    if not config.dispatch.run:
        return DispatchOutcome.COPIED if copied else DispatchOutcome.NOTHING

    if config.dispatch.confirm and not confirm_run(entry.complete_command):
        console.print("[dim]Execution cancelled.[/]")
        return DispatchOutcome.CANCELLED

    return _run(entry)
