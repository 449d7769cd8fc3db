"""Domain models for snippet sources and the flattened catalog."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any


class SnippetFormatError(ValueError):
    """Raised when a source entry does not have the shape of a snippet."""


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise SnippetFormatError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _str_list(raw: dict[str, Any], key: str) -> list[str]:
    if key not in raw:
        return []
    value = raw[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SnippetFormatError(f"'{key}' must be a list of strings")
    return list(value)


@dataclass
class SnippetDefinition:
    """A command snippet as authored in a source file.

    ``entry_point`` is rewritten to an absolute path by ``resolve()`` when the
    source is loaded; ``executable`` is left as-is so PATH lookup still works.
    """

    labels: list[str] = field(default_factory=list)
    description: str | None = None
    executable: Path | None = None
    entry_point: Path | None = None
    args: list[str] = field(default_factory=list)
    shell: bool = False

    @classmethod
    def from_dict(cls, raw: Any) -> SnippetDefinition:
        """Decode one source entry.

        Missing fields take their defaults and unknown keys are ignored.

        Raises:
            SnippetFormatError: if *raw* is not an object or a field has the
                wrong type.
        """
        if not isinstance(raw, dict):
            raise SnippetFormatError(f"expected an object, got {type(raw).__name__}")

        shell = raw.get("if_shell", False)
        if not isinstance(shell, bool):
            raise SnippetFormatError(f"'if_shell' must be true or false, got {shell!r}")

        executable = _optional_str(raw, "executable")
        entry_point = _optional_str(raw, "entry_point")

        return cls(
            labels=_str_list(raw, "labels"),
            description=_optional_str(raw, "description"),
            executable=Path(executable) if executable is not None else None,
            entry_point=Path(entry_point) if entry_point is not None else None,
            args=_str_list(raw, "args"),
            shell=shell,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape used in source files."""
        return {
            "labels": list(self.labels),
            "description": self.description,
            "executable": str(self.executable) if self.executable is not None else None,
            "entry_point": str(self.entry_point) if self.entry_point is not None else None,
            "args": list(self.args),
            "if_shell": self.shell,
        }

    def resolve(self, base_dir: Path) -> SnippetDefinition:
        """Return a copy whose relative entry point is joined onto *base_dir*."""
        if self.entry_point is None or self.entry_point.is_absolute():
            return self
        return replace(self, entry_point=base_dir / self.entry_point)


@dataclass
class SnippetSource:
    """One loaded JSON source: the simple-commands file or a plugin file."""

    directory: Path
    file: Path
    entries: dict[str, SnippetDefinition]


def compose_command(snippet: SnippetDefinition) -> str:
    """Join executable, entry point and args with single spaces."""
    parts: list[str] = []
    if snippet.executable is not None:
        parts.append(str(snippet.executable))
    if snippet.entry_point is not None:
        parts.append(str(snippet.entry_point))
    parts.extend(snippet.args)
    return " ".join(parts)


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    complete_command: str
    source_file: Path
    labels: tuple[str, ...] = ()
    description: str | None = None
    executable: Path | None = None
    entry_point: Path | None = None
    args: tuple[str, ...] = ()
    shell: bool = False

    @classmethod
    def from_snippet(
        cls, name: str, snippet: SnippetDefinition, source_file: Path
    ) -> CatalogEntry:
        return cls(
            name=name,
            complete_command=compose_command(snippet),
            source_file=source_file,
            labels=tuple(snippet.labels),
            description=snippet.description,
            executable=snippet.executable,
            entry_point=snippet.entry_point,
            args=tuple(snippet.args),
            shell=snippet.shell,
        )


@dataclass(frozen=True)
class Catalog:
    """Ordered, flattened list of every snippet for one run.

    An entry's index is its position here; the selector protocol relies on
    that index staying stable between encoding and decoding.
    """

    entries: tuple[CatalogEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> CatalogEntry:
        return self.entries[index]

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries
