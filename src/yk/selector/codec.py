"""Line protocol between yk and the external fuzzy selector.

Each catalog entry becomes one line:

    {index}: {executable}🍃────🍃{name}🍃────🍃{labels}🍃────🍃{source_file}

The selector shows and searches fields 1-3, previews fields 2 and 4, and
prints the chosen line back unchanged. Only the leading index is read back;
the other fields exist for the person choosing.

Fields containing the delimiter or a line break are rejected rather than
escaped: ``encode_entry`` raises and ``encode_catalog`` skips the entry with a
warning. Skipped entries keep their index gap, so every encoded index still
points at the same catalog position.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterator

from yk.catalog.models import Catalog, CatalogEntry
from yk.catalog.store import SourceWarning

DELIMITER = "🍃────🍃"

_NO_EXECUTABLE = "None"
_NO_LABELS = "No labels"
_LINE_BREAKS = ("\n", "\r")


class DelimiterCollisionError(ValueError):
    """Raised when an entry field would corrupt the line framing."""


class SelectorProtocolError(ValueError):
    """Base class for selector replies that cannot be mapped to an entry."""


class SelectorFormatError(SelectorProtocolError):
    """The reply does not have the expected field layout."""


class SelectorParseError(SelectorProtocolError):
    """The reply's index prefix is not a non-negative integer."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Failed to parse index, original value: '{raw}'")
        self.raw = raw


class SelectorRangeError(SelectorProtocolError):
    """The reply's index is outside the catalog."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(
            f"Index {index} out of range, valid range is 0-{size - 1}, total commands: {size}"
        )
        self.index = index
        self.size = size


def _check_field(name: str, value: str) -> str:
    if DELIMITER in value:
        raise DelimiterCollisionError(f"{name} contains the selector delimiter: {value!r}")
    if any(ch in value for ch in _LINE_BREAKS):
        raise DelimiterCollisionError(f"{name} contains a line break: {value!r}")
    return value


def encode_entry(index: int, entry: CatalogEntry) -> str:
    """Return the selector line for *entry* at catalog position *index*.

    Raises:
        DelimiterCollisionError: if a displayed field contains the delimiter
            or a line break.
    """
    executable = str(entry.executable) if entry.executable is not None else _NO_EXECUTABLE
    labels = " ".join(entry.labels) if entry.labels else _NO_LABELS
    fields = [
        _check_field("executable", executable),
        _check_field("name", entry.name),
        _check_field("labels", labels),
        _check_field("source file", str(entry.source_file)),
    ]
    return f"{index}: " + DELIMITER.join(fields)


def encode_catalog(catalog: Catalog) -> Iterator[str]:
    """Yield one selector line per encodable entry, in catalog order."""
    for index, entry in enumerate(catalog):
        try:
            yield encode_entry(index, entry)
        except DelimiterCollisionError as exc:
            warnings.warn(
                f"command '{entry.name}' cannot be shown in the selector: {exc}",
                SourceWarning,
                stacklevel=2,
            )


def _parse_index(raw: str) -> int:
    # isdecimal() rejects signs and whitespace that int() would accept.
    if not raw.isascii() or not raw.isdecimal():
        raise SelectorParseError(raw)
    return int(raw)


def decode_reply(returncode: int, stdout: str, size: int) -> int | None:
    """Map the selector's exit status and output back to a catalog index.

    Args:
        returncode: Selector exit status; non-zero means the user aborted.
        stdout: Everything the selector printed.
        size: Number of entries in the catalog that was encoded.

    Returns:
        The selected index, or None when nothing was selected.

    Raises:
        SelectorFormatError: if the reply has no fields.
        SelectorParseError: if the index prefix is not a non-negative integer.
        SelectorRangeError: if the index is not in ``[0, size)``.
    """
    if returncode != 0:
        return None

    line = stdout.strip()
    if not line:
        return None

    parts = line.split(DELIMITER)
    if not parts or not parts[0]:
        raise SelectorFormatError(f"Invalid selection format: {line}")

    index = _parse_index(parts[0].split(":", 1)[0].strip())
    if index >= size:
        raise SelectorRangeError(index, size)
    return index
