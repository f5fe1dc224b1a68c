# src/findmyroom/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/findmyroom/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `FINDMYROOM_CONFIG_PATH`
- a small whitelist of environment variables (e.g., `FINDMYROOM_GEOCODER_URL`)

Design rule:
- Tuning knobs (timeouts, scatter radius, provider URL) live in YAML, not in the resolver.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any
from findmyroom.core.env import load_dotenv_if_present, resolve_project_path

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `findmyroom.config`."""
    text = resources.files("findmyroom.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "Find-My-Room"
    log_level: str = "INFO"


class GeocodingSettings(BaseModel):
    """Knobs for the tiered geocoding lookup and the privacy scatter.

    `timeout_seconds` is handed to httpx, which applies it to each phase (connect,
    read, write, pool) separately; it bounds how long the provider may stall, not
    the wall-clock time of a whole tier.
    """

    base_url: str = "https://nominatim.openstreetmap.org/search"
    country: str = "India"
    timeout_seconds: float = Field(5, gt=0)
    user_agent: str = "findmyroom/0.1.0 (+https://local)"
    accept_language: str | None = "en-IN"
    scatter_degrees: float = Field(0.003, ge=0)
    scatter_decimals: int = Field(6, ge=0, le=15)
    max_requests_per_minute: float = Field(0, ge=0)
    # False reproduces the old client: the first transport/parse error ends the lookup.
    fallback_on_error: bool = True


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small to avoid surprising overrides.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("FINDMYROOM_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    geocoder_url = os.getenv("FINDMYROOM_GEOCODER_URL")
    if geocoder_url:
        data.setdefault("geocoding", {})["base_url"] = geocoder_url

    timeout = os.getenv("FINDMYROOM_GEOCODER_TIMEOUT_SECONDS")
    if timeout:
        data.setdefault("geocoding", {})["timeout_seconds"] = float(timeout)

    user_agent = os.getenv("FINDMYROOM_GEOCODER_USER_AGENT")
    if user_agent:
        data.setdefault("geocoding", {})["user_agent"] = user_agent

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("FINDMYROOM_CONFIG_PATH")
    raw = (
        _read_yaml_file(resolve_project_path(config_path))
        if config_path
        else _read_package_yaml("defaults.yaml")
    )
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
