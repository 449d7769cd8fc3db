"""Snippet source reader.

A source is a JSON object mapping command names to snippet definitions:

    {
      "status": {"executable": "git", "args": ["status", "-s"], "labels": ["git"]},
      "deploy": {"executable": "bash", "entry_point": "scripts/deploy.sh"}
    }

Relative ``entry_point`` paths are resolved against the directory holding the
source file. Problems that only affect one source or one entry are reported
with ``warnings.warn(..., SourceWarning)`` and never abort the caller.

Usage:
    source = read_source(Path("~/.config/yk/simple_commands.json"), "simple commands")
    if source is not None:
        for name, snippet in source.entries.items():
            ...
"""

from __future__ import annotations

import json
import warnings
from pathlib import Path

from yk.catalog.models import SnippetDefinition, SnippetFormatError, SnippetSource


class SourceWarning(UserWarning):
    """A source or one of its entries was skipped."""


class SourceResolutionError(RuntimeError):
    """Raised when a source file has no directory to resolve entry points against."""


def _warn(message: str) -> None:
    warnings.warn(message, SourceWarning, stacklevel=3)


def _base_dir(file: Path) -> Path:
    """Return the directory entry points of *file* are resolved against."""
    if not file.name or file.parent == file:
        raise SourceResolutionError(f"Cannot determine the directory of source file '{file}'")
    return file.parent


def read_source(file: Path, label: str) -> SnippetSource | None:
    """Load one snippet source.

    Args:
        file: Path to the JSON source file.
        label: Human-readable name used in warnings (e.g. "plugin docker").

    Returns:
        The loaded source, or None if the file is missing, unreadable, not a
        JSON object, or has no valid entries.

    Raises:
        SourceResolutionError: if *file* has no parent directory.
    """
    if not file.exists():
        _warn(f"{label} configuration file '{file}' does not exist")
        return None

    if not file.is_file():
        _warn(f"{label} configuration file '{file}' is not a valid file")
        return None

    base_dir = _base_dir(file)

    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        _warn(f"{label} configuration file '{file}' could not be read: {exc}")
        return None

    if not isinstance(data, dict):
        _warn(f"{label} configuration file format error: expected object format")
        return None

    entries: dict[str, SnippetDefinition] = {}
    for name, raw in data.items():
        try:
            snippet = SnippetDefinition.from_dict(raw)
        except SnippetFormatError as exc:
            _warn(f"{label} command '{name}' format error: {exc}")
            continue
        entries[name] = snippet.resolve(base_dir)

    if not entries:
        _warn(f"{label} configuration file has no valid commands")
        return None

    return SnippetSource(directory=base_dir, file=file, entries=entries)
