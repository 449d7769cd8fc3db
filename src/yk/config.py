"""yk settings loader and configuration roots.

Priority (high → low):
  1. Environment variables  (YK_SELECTOR, YK_PREVIEW, YK_EDITOR)
  2. <config_dir>/config.yaml
  3. Hardcoded defaults

The config directory defaults to ~/.config/yk and can be moved with
YK_CONFIG_DIR or the --config-dir CLI option.
All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import warnings
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_DEFAULT_CONFIG_DIR: Path = Path.home() / ".config" / "yk"
CONFIG_FILE_NAME: str = "config.yaml"
PLUGINS_DIR_NAME: str = "plugins"
SIMPLE_COMMANDS_FILE_NAME: str = "simple_commands.json"

_KNOWN_SECTIONS: frozenset[str] = frozenset(["selector", "preview", "editor", "dispatch"])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when the settings file is missing, unparseable or holds invalid values."""


# ---------------------------------------------------------------------------
# Roots
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Roots:
    """Filesystem locations yk reads from.

    Attributes:
        config_dir: Directory holding everything below.
        config_file: The YAML settings file.
        plugins_dir: One subdirectory per plugin, each with ``<name>.json``.
        simple_commands_file: The source edited by ``yk new``.
    """

    config_dir: Path
    config_file: Path
    plugins_dir: Path
    simple_commands_file: Path

    @classmethod
    def from_config_dir(cls, config_dir: Path) -> Roots:
        config_dir = Path(config_dir)
        return cls(
            config_dir=config_dir,
            config_file=config_dir / CONFIG_FILE_NAME,
            plugins_dir=config_dir / PLUGINS_DIR_NAME,
            simple_commands_file=config_dir / SIMPLE_COMMANDS_FILE_NAME,
        )


def default_roots(config_dir: Path | None = None) -> Roots:
    """Return the roots for *config_dir*, $YK_CONFIG_DIR or ~/.config/yk."""
    if config_dir is not None:
        return Roots.from_config_dir(config_dir)
    if env_dir := os.environ.get("YK_CONFIG_DIR"):
        return Roots.from_config_dir(Path(env_dir).expanduser())
    return Roots.from_config_dir(_DEFAULT_CONFIG_DIR)


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class SelectorCfg:
    """Fuzzy selector program (config.yaml: selector:)."""

    executable: str = "fzf"


@dataclass
class PreviewCfg:
    """Program used by the selector's preview pane (config.yaml: preview:)."""

    executable: str = "rg"


@dataclass
class EditorCfg:
    """Editor opened by ``yk find --edit`` (config.yaml: editor:)."""

    executable: str = "hx"


@dataclass
class DispatchCfg:
    """What happens to a selected command (config.yaml: dispatch:).

    Attributes:
        run: Execute the command after selection.
        confirm: Ask before executing.
        copy: Copy the complete command to the clipboard.
    """

    run: bool = True
    confirm: bool = True
    copy: bool = True


@dataclass
class YkConfig:
    """Root settings object, built by load_config()."""

    selector: SelectorCfg = field(default_factory=SelectorCfg)
    preview: PreviewCfg = field(default_factory=PreviewCfg)
    editor: EditorCfg = field(default_factory=EditorCfg)
    dispatch: DispatchCfg = field(default_factory=DispatchCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _section(data: dict[str, Any], name: str, source: Path) -> dict[str, Any]:
    raw = data.get(name)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Section '{name}' in '{source}' must be a mapping, got {type(raw).__name__}."
        )
    return raw


def _flag(raw: dict[str, Any], key: str, default: bool, source: Path) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(
            f"dispatch.{key} in '{source}' must be true or false, got {value!r}."
        )
    return value


def _program(raw: dict[str, Any], section: str, default: str, source: Path) -> str:
    value = raw.get("executable")
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"{section}.executable in '{source}' must be a program name, got {value!r}."
        )
    return value


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------


def _cfg_from_dict(data: dict[str, Any], source: Path) -> YkConfig:
    """Build a *YkConfig* from a raw YAML dict."""
    cfg = YkConfig()

    s = _section(data, "selector", source)
    cfg.selector = SelectorCfg(executable=_program(s, "selector", cfg.selector.executable, source))

    p = _section(data, "preview", source)
    cfg.preview = PreviewCfg(executable=_program(p, "preview", cfg.preview.executable, source))

    e = _section(data, "editor", source)
    cfg.editor = EditorCfg(executable=_program(e, "editor", cfg.editor.executable, source))

    d = _section(data, "dispatch", source)
    cfg.dispatch = DispatchCfg(
        run=_flag(d, "run", cfg.dispatch.run, source),
        confirm=_flag(d, "confirm", cfg.dispatch.confirm, source),
        copy=_flag(d, "copy", cfg.dispatch.copy, source),
    )

    return cfg


def _apply_env_overrides(cfg: YkConfig) -> YkConfig:
    """Apply YK_* environment variable overrides."""
    if exe := os.environ.get("YK_SELECTOR"):
        cfg.selector.executable = exe
    if exe := os.environ.get("YK_PREVIEW"):
        cfg.preview.executable = exe
    if exe := os.environ.get("YK_EDITOR"):
        cfg.editor.executable = exe
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(roots: Roots) -> YkConfig:
    """Load and return the *YkConfig* stored under *roots*.

    Args:
        roots: Locations to read from; only ``roots.config_file`` is used.

    Returns:
        Settings with defaults filled in and env var overrides applied.

    Raises:
        ConfigError: If the file does not exist, is not valid YAML, is not a
            mapping, or holds a value of the wrong type.
    """
    path = roots.config_file
    if not path.is_file():
        raise ConfigError(f"Configuration file '{path}' does not exist.")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration file '{path}' is not valid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(
            f"Configuration file '{path}' must contain a mapping, got {type(raw).__name__}."
        )

    _warn_unknown_keys(raw, path)
    cfg = _cfg_from_dict(raw, path)
    return _apply_env_overrides(cfg)


def write_default_config(path: Path) -> Path:
    """Write the default settings to *path*, replacing any existing file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    header = (
        "# yk configuration.\n"
        "# selector/preview/editor: programs looked up on PATH.\n"
        "# dispatch: what happens to the command you pick.\n"
        "\n"
    )
    body = yaml.safe_dump(asdict(YkConfig()), sort_keys=False, default_flow_style=False)
    path.write_text(header + body, encoding="utf-8")
    return path
