# src/cityradius/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/cityradius/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `CITYRADIUS_CONFIG_PATH`
- a small whitelist of environment variables (e.g., `CITYRADIUS_API_TOKEN`)

Design rule:
- Paths, limits and the shared API secret live in YAML/env, not in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from cityradius.core.env import load_dotenv_if_present

# Equatorial circumference; pole-to-pole is shorter, so this is the practical ceiling.
EQUATORIAL_CIRCUMFERENCE_KM = 40_075


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `cityradius.config`."""
    text = resources.files("cityradius.config").joinpath(filename).read_text(encoding="utf-8")
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
    name: str = "CityRadius"
    log_level: str = "INFO"
    log_performance: bool = False


class CatalogSettings(BaseModel):
    path: str = "data/addresses/addresses.json"
    dedupe_tag_matches: bool = True


class LookupSettings(BaseModel):
    dir: str = "data/radius_lookups"
    max_radius_km: int = Field(EQUATORIAL_CIRCUMFERENCE_KM, ge=1, le=EQUATORIAL_CIRCUMFERENCE_KM)


class ApiSettings(BaseModel):
    # None disables the bearer check (local development only).
    token: str | None = None


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    lookups: LookupSettings = Field(default_factory=LookupSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small to avoid exposing unsafe overrides.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("CITYRADIUS_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    log_performance = os.getenv("CITYRADIUS_LOG_PERFORMANCE")
    if log_performance:
        data.setdefault("app", {})["log_performance"] = log_performance.strip().lower() in {"1", "true", "yes", "y"}

    catalog_path = os.getenv("CITYRADIUS_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    lookups_dir = os.getenv("CITYRADIUS_LOOKUPS_DIR")
    if lookups_dir:
        data.setdefault("lookups", {})["dir"] = lookups_dir

    token = os.getenv("CITYRADIUS_API_TOKEN")
    if token:
        data.setdefault("api", {})["token"] = token

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("CITYRADIUS_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
