"""YAML config loader with environment override and dotted-key reads."""

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from weatherdash.config.schema import DashboardConfig

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENWEATHER_API_KEY"
MASK = "********"


class ConfigError(Exception):
    """Raised when the configuration cannot be used as given."""


def load_config(path: str | Path) -> DashboardConfig:
    """Load and validate config from a YAML file.

    A missing file yields defaults. If `api.api_key` is empty, the
    OPENWEATHER_API_KEY environment variable fills it in.
    """
    path = Path(path)
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    else:
        logger.info("Config %s not found, using defaults", path)
        raw = {}

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    api = raw.get("api") or {}
    if not isinstance(api, dict):
        raise ConfigError(f"Config {path}: 'api' must be a mapping")
    raw["api"] = api
    if not api.get("api_key"):
        env_key = os.environ.get(API_KEY_ENV, "")
        if env_key:
            api["api_key"] = env_key

    return DashboardConfig(**raw)


def masked_config_json(config: DashboardConfig) -> str:
    """Serialize config for display with the API key hidden."""
    data = json.loads(config.model_dump_json())
    if data["api"]["api_key"]:
        data["api"]["api_key"] = MASK
    return json.dumps(data, indent=2)


def get_config_value(config: DashboardConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'ui.notification_seconds'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
