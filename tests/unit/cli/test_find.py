"""Tests for yk find (and the bare `yk` default)."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from yk.catalog import build_catalog
from yk.cli.main import app
from yk.config import Roots
from yk.dispatch import DispatchOutcome
from yk.selector import DELIMITER, SelectorNotFoundError, SelectorReply, encode_entry

runner = CliRunner()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _simple(roots: Roots, data: dict) -> None:
    roots.simple_commands_file.write_text(json.dumps(data), encoding="utf-8")


def _two_commands(roots: Roots) -> None:
    _simple(
        roots,
        {
            "status": {"executable": "git", "args": ["status", "-s"], "labels": ["git"]},
            "list": {"executable": "ls", "args": ["-la"]},
        },
    )


def _find(roots: Roots, *extra: str, input: str | None = None):
    return runner.invoke(app, ["find", "--config-dir", str(roots.config_dir), *extra], input=input)


def _reply_for(lines: list[str], index: int) -> SelectorReply:
    return SelectorReply(returncode=0, stdout=lines[index] + "\n")


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


def test_find_without_config_exits_1(tmp_path: Path) -> None:
    result = runner.invoke(app, ["find", "--config-dir", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "yk init" in result.output


def test_find_config_error_still_reports_warnings(roots: Roots) -> None:
    roots.config_file.write_text(
        yaml.dump({"history": {"size": 10}, "dispatch": {"run": "yes"}}), encoding="utf-8"
    )
    result = _find(roots)
    assert result.exit_code == 1
    assert "history" in result.output
    assert "dispatch.run" in result.output


def test_find_with_no_commands_exits_1(roots: Roots) -> None:
    with patch("yk.cli.find.run_selector") as selector:
        result = _find(roots)
    assert result.exit_code == 1
    assert "No commands found" in result.output
    selector.assert_not_called()


def test_find_reports_source_warnings(roots: Roots) -> None:
    _simple(roots, {"ok": {"executable": "ls"}, "bad": {"args": 5}})
    with patch("yk.cli.find.run_selector", return_value=SelectorReply(130, "")):
        result = _find(roots)
    assert result.exit_code == 0
    assert "Warning" in result.output
    assert "bad" in result.output


def test_find_selector_missing_exits_1(roots: Roots) -> None:
    _two_commands(roots)
    with patch("yk.cli.find.run_selector", side_effect=SelectorNotFoundError("fzf: not found")):
        result = _find(roots)
    assert result.exit_code == 1
    assert "selector" in result.output.lower()


# ---------------------------------------------------------------------------
# Selection outcomes
# ---------------------------------------------------------------------------


def test_find_passes_encoded_catalog_to_selector(roots: Roots) -> None:
    _two_commands(roots)
    with patch("yk.cli.find.run_selector", return_value=SelectorReply(1, "")) as selector:
        _find(roots)

    lines = selector.call_args.args[0]
    assert len(lines) == 2
    assert lines[0].startswith("0: git" + DELIMITER + "status")
    assert lines[1].startswith("1: ls" + DELIMITER + "list")


def test_find_dispatches_selected_entry(roots: Roots) -> None:
    _two_commands(roots)
    with patch("yk.cli.find.run_selector", side_effect=lambda lines, cfg: _reply_for(lines, 1)), \
            patch("yk.cli.find.dispatch", return_value=DispatchOutcome.RAN) as dispatch:
        result = _find(roots)

    assert result.exit_code == 0, result.output
    entry = dispatch.call_args.args[0]
    assert entry.name == "list"
    assert entry.complete_command == "ls -la"
    assert dispatch.call_args.kwargs["edit"] is False


def test_find_edit_flag_forwarded(roots: Roots) -> None:
    _two_commands(roots)
    with patch("yk.cli.find.run_selector", side_effect=lambda lines, cfg: _reply_for(lines, 0)), \
            patch("yk.cli.find.dispatch") as dispatch:
        result = _find(roots, "--edit")

    assert result.exit_code == 0
    assert dispatch.call_args.kwargs["edit"] is True


@pytest.mark.parametrize("reply", [SelectorReply(130, ""), SelectorReply(0, ""), SelectorReply(0, "  \n")])
def test_find_no_selection_does_nothing(roots: Roots, reply: SelectorReply) -> None:
    _two_commands(roots)
    with patch("yk.cli.find.run_selector", return_value=reply), \
            patch("yk.cli.find.dispatch") as dispatch:
        result = _find(roots)

    assert result.exit_code == 0
    dispatch.assert_not_called()


def test_find_out_of_range_reply_reported(roots: Roots) -> None:
    _two_commands(roots)
    bogus = SelectorReply(0, f"2: rm{DELIMITER}x{DELIMITER}y{DELIMITER}z\n")
    with patch("yk.cli.find.run_selector", return_value=bogus), \
            patch("yk.cli.find.dispatch") as dispatch:
        result = _find(roots)

    assert result.exit_code == 0
    assert "out of range" in result.output
    dispatch.assert_not_called()


def test_find_unparseable_reply_reported(roots: Roots) -> None:
    _two_commands(roots)
    with patch("yk.cli.find.run_selector", return_value=SelectorReply(0, "oops\n")), \
            patch("yk.cli.find.dispatch") as dispatch:
        result = _find(roots)

    assert result.exit_code == 0
    assert "Failed to parse index" in result.output
    dispatch.assert_not_called()


# ---------------------------------------------------------------------------
# End to end through the real dispatcher
# ---------------------------------------------------------------------------


def test_find_confirm_declined(roots: Roots) -> None:
    roots.config_file.write_text(
        yaml.dump({"dispatch": {"run": True, "confirm": True, "copy": False}}), encoding="utf-8"
    )
    _two_commands(roots)

    with patch("yk.cli.find.run_selector", side_effect=lambda lines, cfg: _reply_for(lines, 0)), \
            patch("yk.dispatch.executor.subprocess.run") as run:
        result = _find(roots, input="n\n")

    assert result.exit_code == 0
    assert "cancelled" in result.output.lower()
    run.assert_not_called()


def test_find_confirm_at_end_of_input_cancels(roots: Roots) -> None:
    roots.config_file.write_text(
        yaml.dump({"dispatch": {"run": True, "confirm": True, "copy": False}}), encoding="utf-8"
    )
    _two_commands(roots)

    with patch("yk.cli.find.run_selector", side_effect=lambda lines, cfg: _reply_for(lines, 0)), \
            patch("yk.dispatch.executor.subprocess.run") as run:
        result = _find(roots, input="")

    assert result.exit_code == 0, result.output
    assert "Aborted" not in result.output
    assert "cancelled" in result.output.lower()
    run.assert_not_called()


def test_find_confirm_accepted_runs(roots: Roots, tmp_path: Path) -> None:
    roots.config_file.write_text(
        yaml.dump({"dispatch": {"run": True, "confirm": True, "copy": False}}), encoding="utf-8"
    )
    marker = tmp_path / "marker"
    _simple(roots, {"touch": {"executable": "touch", "args": [str(marker)]}})

    with patch("yk.cli.find.run_selector", side_effect=lambda lines, cfg: _reply_for(lines, 0)):
        result = _find(roots, input="y\n")

    assert result.exit_code == 0, result.output
    assert marker.exists()


def test_find_failing_command_still_exits_0(roots: Roots) -> None:
    roots.config_file.write_text(
        yaml.dump({"dispatch": {"run": True, "confirm": False, "copy": False}}), encoding="utf-8"
    )
    _simple(roots, {"fail": {"executable": "false"}})

    with patch("yk.cli.find.run_selector", side_effect=lambda lines, cfg: _reply_for(lines, 0)):
        result = _find(roots)

    assert result.exit_code == 0
    assert "Command execution failed" in result.output


# ---------------------------------------------------------------------------
# Bare `yk`
# ---------------------------------------------------------------------------


def test_bare_yk_runs_find(roots: Roots, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YK_CONFIG_DIR", str(roots.config_dir))
    _two_commands(roots)

    with patch("yk.cli.find.run_selector", return_value=SelectorReply(130, "")) as selector:
        result = runner.invoke(app, [])

    assert result.exit_code == 0
    selector.assert_called_once()


def test_encoded_line_matches_cli_encoding(roots: Roots) -> None:
    """The line handed back by the selector is exactly what encode_entry produced."""
    _two_commands(roots)
    with patch("yk.cli.find.run_selector", return_value=SelectorReply(1, "")) as selector:
        _find(roots)

    catalog = build_catalog(roots)
    assert selector.call_args.args[0] == [encode_entry(i, e) for i, e in enumerate(catalog)]
