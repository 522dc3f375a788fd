"""
Application configuration for the Declutter Advisor CLI.

Layers, lowest precedence first:
  1. ``config/default.toml``   committed defaults
  2. ``config/local.toml``     machine-specific overrides, deep-merged (gitignored)
  3. ``.env``                  loaded into the environment, never overriding it
  4. ``DECLUTTER_ADVISOR_*``   environment variables (see ``_ENV_OVERRIDES``)

Usage::

    config = load_config()                      # project config/default.toml
    config = load_config(Path("my.toml"))       # explicit file

Only the CLI reads ``AppConfig``. The decision engine receives
``EngineSettings`` resolved from the settings store and knows nothing about
TOML or environment variables.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# env var -> (section, key); a section of None targets the top level.
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str]] = {
    "DECLUTTER_ADVISOR_SETTINGS_FILE": ("engine", "settings_file"),
    "DECLUTTER_ADVISOR_OUTPUT_DIR":    ("output", "output_dir"),
    "DECLUTTER_ADVISOR_LOG_LEVEL":     ("logging", "level"),
    "DECLUTTER_ADVISOR_DEBUG":         (None, "debug"),
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


# ── Sections ──────────────────────────────────────────────────────────────────

class EngineConfig(BaseModel):
    """Where the engine's runtime settings come from.

    Attributes:
        settings_file:    Exported settings-store document (JSON). ``None``
                          means built-in defaults.
        default_strategy: Strategy key forced for every evaluation (admin
                          preview); skips A/B assignment.
    """

    model_config = ConfigDict(frozen=True)

    settings_file: Optional[str] = None
    default_strategy: Optional[str] = None


class OutputConfig(BaseModel):
    """Directory for batch evaluation reports."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs/evaluations"


class LoggingConfig(BaseModel):
    """Log level, optional log file, and line format."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalise_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'; expected one of {', '.join(LOG_LEVELS)}.")
        return level


class AppConfig(BaseModel):
    """Top-level configuration assembled by ``load_config()``."""

    model_config = ConfigDict(frozen=True)

    engine:  EngineConfig = EngineConfig()
    output:  OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug:   bool = False


# ── Loading ───────────────────────────────────────────────────────────────────

def project_root() -> Path:
    """Nearest ancestor of this package that holds ``pyproject.toml``."""
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").is_file():
            return parent
    return here.parents[1]


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Read, layer and validate the application configuration.

    Args:
        config_path: TOML file to start from. Defaults to
            ``<project root>/config/default.toml``. A ``local.toml`` next to
            it is merged on top when present.

    Returns:
        Validated ``AppConfig``.

    Raises:
        FileNotFoundError: If the base TOML file is missing.
        pydantic.ValidationError: If a merged value is invalid.
    """
    root = project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    base_path = Path(config_path) if config_path is not None else root / "config" / "default.toml"
    if not base_path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {base_path}. "
            "Create config/default.toml or pass --config."
        )

    raw = _read_toml(base_path)
    local_path = base_path.with_name("local.toml")
    if local_path.is_file():
        raw = _deep_merge(raw, _read_toml(local_path))

    return _build_app_config(_apply_env_overrides(raw, os.environ))


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(raw: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Copy every set ``DECLUTTER_ADVISOR_*`` variable into the raw config."""
    result = dict(raw)
    for var, (section, key) in _ENV_OVERRIDES.items():
        value = environ.get(var)
        if not value:
            continue
        if section is None:
            result[key] = value.strip().lower() in _TRUTHY
        else:
            result[section] = {**result.get(section, {}), key: value}
    return result


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Validate raw TOML tables into ``AppConfig``.

    ``debug`` may live at the top level or under ``[project]``; the top level
    wins.
    """
    debug = raw.get("debug", raw.get("project", {}).get("debug", False))
    return AppConfig.model_validate({
        "engine":  raw.get("engine", {}),
        "output":  raw.get("output", {}),
        "logging": raw.get("logging", {}),
        "debug":   debug,
    })
