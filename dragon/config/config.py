#!/usr/bin/env python3
# dragon/config/config.py
from __future__ import annotations

"""
Configuration loader for dragon-config.toml (stdlib tomllib).

Precedence (low → high):
  1) Built-in defaults
  2) dragon-config.toml (or the file named by DRAGON_CONFIG)
  3) DRAGON_LOG_LEVEL environment variable

A missing file is created with the defaults. A file that exists but cannot be
read, parsed or validated raises ConfigError.

File layout:

    theme = "dark"
    prompt = "Dragon-shell"
    history_file = ".dragon_history"
    history_size = 1000
    log_level = "WARNING"
    log_file = ""

    [[aliases]]
    name = "ll"
    command = "lf ."

    [[env]]
    key = "EDITOR"
    value = "vim"
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import os
import tomllib  # stdlib in 3.11+

from dragon import SHELL_NAME
from dragon.errors import ConfigError

CONFIG_FILE_NAME = "dragon-config.toml"
CONFIG_PATH_ENV = "DRAGON_CONFIG"
LOG_LEVEL_ENV = "DRAGON_LOG_LEVEL"

DEFAULTS: dict[str, Any] = {
    "theme": "dark",
    "prompt": SHELL_NAME,
    "history_file": ".dragon_history",
    "history_size": 1000,
    "log_level": "WARNING",
    "log_file": "",
    "aliases": [],
    "env": [],
}

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# ---------- data model ----------

@dataclass(frozen=True)
class AppConfig:
    theme: str
    prompt: str
    history_file: Path
    history_size: int
    log_level: str
    log_file: Path | None
    aliases: dict[str, str] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)
    source: Path | None = None


# ---------- writer ----------

def _toml_string(value: Any) -> str:
    s = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{s}"'


def _toml_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return _toml_string(value)


def _write_config_file_toml(cfg_map: Mapping[str, Any], path: Path) -> Path:
    """
    Persist a TOML config, scalars first then [[aliases]] and [[env]] tables.
    Returns the path written.
    """
    lines: list[str] = []
    for key, value in cfg_map.items():
        if isinstance(value, list):
            continue
        lines.append(f"{key} = {_toml_scalar(value)}")

    for table_name, fields in (("aliases", ("name", "command")), ("env", ("key", "value"))):
        for entry in cfg_map.get(table_name, []):
            lines.append("")
            lines.append(f"[[{table_name}]]")
            for field_name in fields:
                lines.append(
                    f"{field_name} = {_toml_string(entry.get(field_name, ''))}")

    try:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to write config at {path}: {exc}") from exc
    return path


# ---------- coercion ----------

def _as_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}")
    return value


def _as_positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"'{key}' must be an integer >= 1, got {value!r}")
    return value


def _as_log_level(value: Any) -> str:
    level = _as_str("log_level", value).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"'log_level' must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
    return level


def _as_pairs(table_name: str, entries: Any, key_field: str, value_field: str) -> dict[str, str]:
    """Turn an array of tables into a dict; later duplicates win."""
    if not isinstance(entries, list):
        raise ConfigError(f"'{table_name}' must be an array of tables")
    pairs: dict[str, str] = {}
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise ConfigError(f"'{table_name}[{index}]' must be a table")
        try:
            key = entry[key_field]
            value = entry[value_field]
        except KeyError as exc:
            raise ConfigError(
                f"'{table_name}[{index}]' is missing '{exc.args[0]}'") from exc
        key = _as_str(f"{table_name}[{index}].{key_field}", key).strip()
        if not key:
            raise ConfigError(
                f"'{table_name}[{index}].{key_field}' must not be empty")
        pairs[key] = _as_str(f"{table_name}[{index}].{value_field}", value)
    return pairs


def _resolve_under(base: Path, value: str) -> Path:
    p = Path(os.path.expandvars(os.path.expanduser(value)))
    return p if p.is_absolute() else (base / p)


# ---------- validation ----------

def _validate_and_build(raw: Mapping[str, Any], *, base: Path, source: Path | None) -> AppConfig:
    config: dict[str, Any] = dict(DEFAULTS)
    config.update(raw)

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        config["log_level"] = env_level

    log_file = _as_str("log_file", config["log_file"]).strip()

    return AppConfig(
        theme=_as_str("theme", config["theme"]),
        prompt=_as_str("prompt", config["prompt"]),
        history_file=_resolve_under(
            base, _as_str("history_file", config["history_file"])),
        history_size=_as_positive_int("history_size", config["history_size"]),
        log_level=_as_log_level(config["log_level"]),
        log_file=_resolve_under(base, log_file) if log_file else None,
        aliases=_as_pairs("aliases", config["aliases"], "name", "command"),
        env=_as_pairs("env", config["env"], "key", "value"),
        source=source,
    )


# ---------- public API ----------

def default_config_path() -> Path:
    """DRAGON_CONFIG if set, else dragon-config.toml in the current directory."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(os.path.expanduser(override))
    return Path.cwd() / CONFIG_FILE_NAME


def load_config(path: str | os.PathLike[str] | None = None) -> AppConfig:
    """
    Load and validate the config file, creating it with defaults if absent.

    Relative paths inside the file (history, log) resolve next to the file.
    """
    config_path = Path(path) if path is not None else default_config_path()
    base = config_path.resolve().parent

    if not config_path.exists():
        _write_config_file_toml(DEFAULTS, config_path)
        return _validate_and_build({}, base=base, source=config_path)

    try:
        with config_path.open("rb") as f:
            raw = tomllib.load(f)
    except OSError as exc:
        raise ConfigError(
            f"Failed to read the config file {config_path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Failed to parse the config file {config_path}: {exc}") from exc

    return _validate_and_build(raw, base=base, source=config_path)
