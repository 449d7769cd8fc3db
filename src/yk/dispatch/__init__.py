"""yk dispatch — edit, copy or run a selected command."""

from yk.dispatch.clipboard import ClipboardError, ClipboardProvider, PyperclipClipboard
from yk.dispatch.executor import (
    CLIPBOARD_FAILURE_ABORTS_RUN,
    DispatchOutcome,
    command_argv,
    confirm_run,
    dispatch,
)

__all__ = [
    "CLIPBOARD_FAILURE_ABORTS_RUN",
    "ClipboardError",
    "ClipboardProvider",
    "DispatchOutcome",
    "PyperclipClipboard",
    "command_argv",
    "confirm_run",
    "dispatch",
]
