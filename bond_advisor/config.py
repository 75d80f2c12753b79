"""
Configuration for the bond advisor CLI and file loaders.

Layers, lowest precedence first:
  1. ``config/default.toml``      - committed defaults
  2. ``config/local.toml``        - optional, deep-merged (gitignored)
  3. ``.env`` at the project root - read into the environment, never
                                    replacing variables already set
  4. ``BOND_ADVISOR_*`` variables - see ``ENV_OVERRIDES``

``load_config(config_path=None) -> AppConfig`` runs the whole chain.

The recommendation engine itself takes no configuration: its thresholds
live as module constants next to the analysis that uses them. Config only
covers the caller side (fallback currency/region, file locations, report
length, logging).
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ── Sections ──────────────────────────────────────────────────────────────────


class DefaultsConfig(BaseModel):
    """Fallbacks applied by the loader to records missing currency/region."""

    model_config = ConfigDict(frozen=True)

    currency: str = "EUR"
    region: str = "eurozone"

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"defaults.currency must be a 3-letter ISO code, got '{v}'.")
        return code

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        region = v.strip().lower()
        if not region:
            raise ValueError("defaults.region must not be empty.")
        return region


class DataConfig(BaseModel):
    """Where the portfolio file lives and where exports go."""

    model_config = ConfigDict(frozen=True)

    portfolio_file: str = "config/examples/portfolio.json"
    output_dir: str = "data/outputs"


class ReportingConfig(BaseModel):
    """Report rendering settings."""

    model_config = ConfigDict(frozen=True)

    timeline_months: int = 18

    @field_validator("timeline_months")
    @classmethod
    def validate_timeline_months(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"timeline_months must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Log level, optional log file and line format."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {list(LOG_LEVELS)}, got '{v}'.")
        return level


class AppConfig(BaseModel):
    """Merged, validated configuration handed to every CLI command."""

    model_config = ConfigDict(frozen=True)

    defaults: DefaultsConfig = DefaultsConfig()
    data: DataConfig = DataConfig()
    reporting: ReportingConfig = ReportingConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Environment overrides ─────────────────────────────────────────────────────


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# variable -> (section or None for top level, key, parser)
ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "BOND_ADVISOR_PORTFOLIO": ("data", "portfolio_file", str),
    "BOND_ADVISOR_LOG_LEVEL": ("logging", "level", str),
    "BOND_ADVISOR_DEBUG":     (None, "debug", _as_bool),
}


# ── Loading ───────────────────────────────────────────────────────────────────


def project_root() -> Path:
    """Nearest ancestor of this package that holds ``pyproject.toml``.

    Falls back to the directory above the package for non-editable installs.
    """
    here = Path(__file__).resolve().parent
    for directory in (here, *here.parents):
        if (directory / "pyproject.toml").is_file():
            return directory
    return here.parent


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build an ``AppConfig`` from every configuration layer.

    Args:
        config_path: Base TOML file. ``<project root>/config/default.toml``
            when omitted. A ``local.toml`` beside it is merged on top.

    Returns:
        The validated, frozen configuration.

    Raises:
        FileNotFoundError: If the base TOML file is missing.
        pydantic.ValidationError: If a merged value is invalid.
    """
    root = project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    base = Path(config_path) if config_path is not None else root / "config" / "default.toml"
    if not base.is_file():
        raise FileNotFoundError(
            f"Config file not found: {base}\n"
            "Create config/default.toml or pass --config PATH."
        )

    raw = _read_toml(base)
    local = base.with_name("local.toml")
    if local.is_file():
        raw = _deep_merge(raw, _read_toml(local))

    return _to_app_config(_with_env_overrides(raw, os.environ))


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` laid over it; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def _with_env_overrides(raw: dict[str, Any], environ: Any) -> dict[str, Any]:
    """Copy of ``raw`` with every set ``ENV_OVERRIDES`` variable applied."""
    out = {k: dict(v) if isinstance(v, dict) else v for k, v in raw.items()}
    for var, (section, key, parse) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if not value:
            continue
        target = out if section is None else out.setdefault(section, {})
        target[key] = parse(value)
    return out


def _to_app_config(raw: dict[str, Any]) -> AppConfig:
    """Validate the merged tables; ``[project].debug`` is the fallback for ``debug``."""
    sections = {name: raw.get(name, {}) for name in ("defaults", "data", "reporting", "logging")}
    debug = raw.get("debug", raw.get("project", {}).get("debug", False))
    return AppConfig.model_validate({**sections, "debug": debug})
