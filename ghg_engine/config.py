"""
config.py – Load and validate calculator settings from the environment.

Settings come from environment variables (or a .env file at the project
root).  Call `get_config()` once at startup to obtain a validated Config.

    GHG_LOG_LEVEL             logging level name          (default INFO)
    GHG_UNCERTAINTY_PCT       ± band for standard factors (default 0.10)
    GHG_LOAD_DEFAULT_FACTORS  seed the built-in catalog   (default true)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from ghg_engine.constants import DEFAULT_UNCERTAINTY_PCT

# Project root: the directory holding the ghg_engine package
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

_env_file = _PROJECT_ROOT / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """Validated runtime configuration."""

    log_level: str = "INFO"
    uncertainty_pct: float = DEFAULT_UNCERTAINTY_PCT
    load_default_factors: bool = True


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise EnvironmentError(f"{name} must be a boolean (true/false), got '{raw}'")


def get_config() -> Config:
    """
    Read environment variables, validate them, and return a Config.

    Raises
    ------
    EnvironmentError
        If any variable is present but holds an invalid value.
    """
    cfg = Config()

    log_level = os.environ.get("GHG_LOG_LEVEL")
    if log_level:
        log_level = log_level.strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise EnvironmentError(f"GHG_LOG_LEVEL is not a logging level: '{log_level}'")
        cfg.log_level = log_level

    raw_pct = os.environ.get("GHG_UNCERTAINTY_PCT")
    if raw_pct:
        try:
            pct = float(raw_pct)
        except ValueError:
            raise EnvironmentError(
                f"GHG_UNCERTAINTY_PCT must be a number, got '{raw_pct}'"
            ) from None
        if not 0.0 <= pct < 1.0:
            raise EnvironmentError(
                f"GHG_UNCERTAINTY_PCT must be in [0, 1), got {pct}"
            )
        cfg.uncertainty_pct = pct

    raw_load = os.environ.get("GHG_LOAD_DEFAULT_FACTORS")
    if raw_load:
        cfg.load_default_factors = _parse_bool("GHG_LOAD_DEFAULT_FACTORS", raw_load)

    return cfg
