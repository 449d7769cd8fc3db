"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from yk.config import Roots, write_default_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's YK_* variables out of every test."""
    for var in ("YK_CONFIG_DIR", "YK_SELECTOR", "YK_PREVIEW", "YK_EDITOR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def roots(tmp_path: Path) -> Roots:
    """Initialised config dir in tmp_path: default config.yaml, empty plugins/."""
    r = Roots.from_config_dir(tmp_path / "yk")
    r.plugins_dir.mkdir(parents=True)
    write_default_config(r.config_file)
    return r
