"""
Configuration Loading Utilities.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/default_config.yaml"

# Every section is always present after loading, even when the YAML file
# leaves it out entirely.
DEFAULTS: dict[str, dict[str, Any]] = {
    "server": {"host": "0.0.0.0", "port": 5000, "environment": "development"},
    "database": {"url": "sqlite:///data/floodmonitor.db", "echo": False},
    "session": {
        "secret": "flood-monitor-secret-key",
        "max_age": 24 * 60 * 60,
        "cookie_name": "floodmonitor_session",
    },
    "weather": {
        "base_url": "https://api.open-meteo.com/v1/forecast",
        "latitude": 7.8731,
        "longitude": 80.7718,
        "forecast_days": 5,
        "cache_seconds": 600,
        "timeout": 10,
    },
    "cors": {"origins": ["http://localhost:5173", "http://localhost:5000"]},
    "static": {"dir": "client/dist"},
    "logging": {"level": "INFO", "file": None},
}


def _convert_numeric_strings(obj: Any) -> Any:
    """
    Recursively convert numeric strings to floats/ints.

    YAML leaves values such as '1.0e-6' or quoted ports as strings.
    """
    if isinstance(obj, dict):
        return {k: _convert_numeric_strings(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_numeric_strings(item) for item in obj]
    elif isinstance(obj, str):
        try:
            if "." in obj or "e" in obj.lower():
                return float(obj)
            return int(obj)
        except ValueError:
            return obj
    return obj


def _merge_defaults(config: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(DEFAULTS)
    for section, values in config.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def apply_env_overrides(config: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """
    Overlay deployment settings taken from environment variables.

    Recognised variables: ``DATABASE_URL``, ``SESSION_SECRET``, ``PORT``,
    ``CORS_ORIGINS`` (comma separated) and ``APP_ENV``.
    """
    env = os.environ if environ is None else environ

    if env.get("DATABASE_URL"):
        config["database"]["url"] = env["DATABASE_URL"]
    if env.get("SESSION_SECRET"):
        config["session"]["secret"] = env["SESSION_SECRET"]
    if env.get("PORT"):
        config["server"]["port"] = int(env["PORT"])
    if env.get("CORS_ORIGINS"):
        config["cors"]["origins"] = [o.strip() for o in env["CORS_ORIGINS"].split(",") if o.strip()]
    if env.get("APP_ENV"):
        config["server"]["environment"] = env["APP_ENV"].lower()
    return config


def default_config() -> dict[str, Any]:
    """Return a fresh copy of the built-in defaults."""
    return copy.deepcopy(DEFAULTS)


def is_production(config: dict[str, Any]) -> bool:
    return config["server"].get("environment") in ("prod", "production")


def load_config(config_path: str | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file. Falls back to
            ``$FLOODMONITOR_CONFIG`` and then ``configs/default_config.yaml``.

    Returns:
        Configuration dictionary with every section populated

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_path = Path(config_path or os.environ.get("FLOODMONITOR_CONFIG", DEFAULT_CONFIG_PATH))

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    config = _convert_numeric_strings(config)
    config = _merge_defaults(config)

    return apply_env_overrides(config)


def resolve_config(config_path: str | None = None) -> dict[str, Any]:
    """Load the YAML config, or fall back to built-in defaults when no file exists."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        if config_path:
            raise
        logger.warning("No configuration file found, using built-in defaults")
        return apply_env_overrides(default_config())
