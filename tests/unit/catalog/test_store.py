"""Tests for the snippet source reader."""

from __future__ import annotations

import json
import warnings
from pathlib import Path

import pytest

from yk.catalog.store import SourceResolutionError, SourceWarning, _base_dir, read_source


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _write(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _read(path: Path, label: str = "plugin demo"):
    """Call read_source and return (result, [warning messages])."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result = read_source(path, label)
    return result, [str(w.message) for w in caught if issubclass(w.category, SourceWarning)]


# ------------------------------------------------------------------
# Missing / invalid sources
# ------------------------------------------------------------------


def test_missing_file_returns_none_with_warning(tmp_path: Path):
    result, messages = _read(tmp_path / "nope.json")
    assert result is None
    assert len(messages) == 1
    assert "plugin demo" in messages[0]
    assert "does not exist" in messages[0]


def test_directory_is_not_a_source(tmp_path: Path):
    (tmp_path / "dir.json").mkdir()
    result, messages = _read(tmp_path / "dir.json")
    assert result is None
    assert "not a valid file" in messages[0]


def test_invalid_json_returns_none(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    result, messages = _read(path)
    assert result is None
    assert "could not be read" in messages[0]


@pytest.mark.parametrize("data", [[{"executable": "ls"}], "ls", 3, None])
def test_non_object_top_level_returns_none(tmp_path: Path, data):
    result, messages = _read(_write(tmp_path / "s.json", data))
    assert result is None
    assert "expected object format" in messages[0]


def test_empty_object_is_no_source(tmp_path: Path):
    result, messages = _read(_write(tmp_path / "s.json", {}))
    assert result is None
    assert "no valid commands" in messages[0]


# ------------------------------------------------------------------
# Entries
# ------------------------------------------------------------------


def test_valid_source_loaded(tmp_path: Path):
    path = _write(
        tmp_path / "s.json",
        {
            "status": {"executable": "git", "args": ["status"]},
            "log": {"executable": "git", "args": ["log", "--oneline"]},
        },
    )
    source, messages = _read(path)

    assert messages == []
    assert source is not None
    assert source.file == path
    assert source.directory == tmp_path
    assert list(source.entries) == ["status", "log"]


def test_malformed_entry_skipped_others_kept(tmp_path: Path):
    path = _write(
        tmp_path / "s.json",
        {
            "a": {"executable": "ls"},
            "b": {"args": "not-a-list"},
            "c": {"executable": "pwd"},
            "d": {"executable": "date", "if_shell": True},
        },
    )
    source, messages = _read(path, label="simple commands")

    assert source is not None
    assert list(source.entries) == ["a", "c", "d"]
    assert len(messages) == 1
    assert "simple commands" in messages[0]
    assert "'b'" in messages[0]


def test_all_entries_invalid_is_no_source(tmp_path: Path):
    path = _write(tmp_path / "s.json", {"a": 1, "b": [], "c": {"labels": "x"}})
    source, messages = _read(path)

    assert source is None
    assert "no valid commands" in messages[-1]


def test_entry_point_resolved_against_source_dir(tmp_path: Path):
    plugin_dir = tmp_path / "plugins" / "deploy"
    path = _write(
        plugin_dir / "deploy.json",
        {"up": {"executable": "bash", "entry_point": "scripts/up.sh"}},
    )
    source, _ = _read(path)

    assert source is not None
    assert source.entries["up"].entry_point == plugin_dir / "scripts" / "up.sh"
    assert source.entries["up"].executable == Path("bash")


def test_absolute_entry_point_kept(tmp_path: Path):
    absolute = str(tmp_path / "abs" / "run.sh")
    path = _write(tmp_path / "p" / "p.json", {"run": {"entry_point": absolute}})
    source, _ = _read(path)
    assert source.entries["run"].entry_point == Path(absolute)


# ------------------------------------------------------------------
# Base directory
# ------------------------------------------------------------------


def test_base_dir_is_parent(tmp_path: Path):
    assert _base_dir(tmp_path / "s.json") == tmp_path


@pytest.mark.parametrize("path", [Path("/"), Path(".")])
def test_base_dir_without_parent_raises(path: Path):
    with pytest.raises(SourceResolutionError):
        _base_dir(path)
