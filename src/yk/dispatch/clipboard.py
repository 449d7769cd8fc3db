"""Clipboard access for copied commands."""

from __future__ import annotations

from typing import Protocol

import pyperclip


class ClipboardError(RuntimeError):
    """Raised when the clipboard cannot be initialised or written."""


class ClipboardProvider(Protocol):
    def set_contents(self, text: str) -> None: ...


class PyperclipClipboard:
    """System clipboard via pyperclip (xclip/xsel/wl-copy, pbcopy, Windows API)."""

    def set_contents(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc
