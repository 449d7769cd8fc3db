"""yk snippet catalog: source reader, aggregator and models."""

from yk.catalog.aggregator import build_catalog, discover_sources
from yk.catalog.models import (
    Catalog,
    CatalogEntry,
    SnippetDefinition,
    SnippetFormatError,
    SnippetSource,
    compose_command,
)
from yk.catalog.store import SourceResolutionError, SourceWarning, read_source

__all__ = [
    "Catalog",
    "CatalogEntry",
    "SnippetDefinition",
    "SnippetFormatError",
    "SnippetSource",
    "SourceResolutionError",
    "SourceWarning",
    "build_catalog",
    "compose_command",
    "discover_sources",
    "read_source",
]
