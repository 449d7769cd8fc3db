"""Catalog aggregation across the simple-commands file and all plugins.

Source order:
  1. <config_dir>/simple_commands.json
  2. <config_dir>/plugins/<name>/<name>.json   for each plugin directory, by name

Every call re-reads the filesystem; nothing is cached.
"""

from __future__ import annotations

import warnings
from pathlib import Path

from yk.catalog.models import Catalog, CatalogEntry
from yk.catalog.store import SourceResolutionError, SourceWarning, read_source
from yk.config import Roots

SIMPLE_COMMANDS_LABEL = "simple commands"


def discover_sources(roots: Roots) -> list[tuple[str, Path]]:
    """Return ``(label, source_file)`` pairs in catalog order.

    Plugin source files are listed whether or not they exist; the reader
    reports missing ones.
    """
    sources = [(SIMPLE_COMMANDS_LABEL, roots.simple_commands_file)]

    if not roots.plugins_dir.is_dir():
        return sources

    for plugin_dir in sorted(roots.plugins_dir.iterdir(), key=lambda p: p.name):
        if not plugin_dir.is_dir():
            continue
        sources.append((f"plugin {plugin_dir.name}", plugin_dir / f"{plugin_dir.name}.json"))

    return sources


def build_catalog(roots: Roots) -> Catalog:
    """Load every source under *roots* and flatten it into one Catalog.

    A source that is missing or broken contributes nothing; the result may be
    empty but this function does not fail because of a single source.
    """
    entries: list[CatalogEntry] = []

    for label, source_file in discover_sources(roots):
        try:
            source = read_source(source_file, label)
        except SourceResolutionError as exc:
            warnings.warn(f"{label}: {exc}", SourceWarning, stacklevel=2)
            continue
        if source is None:
            continue

        for name, snippet in source.entries.items():
            entries.append(CatalogEntry.from_snippet(name, snippet, source.file))

    return Catalog(entries=tuple(entries))
