"""Configuration utilities for mlssync.

Settings for the remote RESO API and the sync batches are read from the
``reso`` section of ``config.json`` and may be overridden through environment
variables, which is how credentials are usually supplied in deployment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from mlssync.infrastructure.db.config import load_config

DEFAULT_HOME_REGION = "NE"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_PROPERTIES_BATCH_SIZE = 100
DEFAULT_FULL_SYNC_BATCH_SIZE = 50

# Environment variable -> settings attribute
ENV_OVERRIDES: dict[str, str] = {
    "RESO_API_URL": "base_url",
    "RESO_ACCESS_TOKEN": "access_token",
    "RESO_CLIENT_ID": "client_id",
    "RESO_CLIENT_SECRET": "client_secret",
    "MLSSYNC_HOME_REGION": "home_region",
}


@dataclass(frozen=True)
class ResoSettings:
    """Connection and batch settings for the remote listing API."""

    base_url: str = ""
    access_token: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    home_region: str = DEFAULT_HOME_REGION
    properties_batch_size: int = DEFAULT_PROPERTIES_BATCH_SIZE
    full_sync_batch_size: int = DEFAULT_FULL_SYNC_BATCH_SIZE

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.base_url.strip())

    @property
    def has_client_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


def _coerce(name: str, raw: Any, default: Any) -> Any:
    if raw is None:
        return default
    try:
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for reso.{name}: {raw!r}") from exc
    return str(raw) if raw != "" else default


def settings_from_mapping(values: Mapping[str, Any]) -> ResoSettings:
    """Build settings from a plain mapping, ignoring unknown keys."""
    defaults = ResoSettings()
    kwargs = {
        name: _coerce(name, values.get(name), getattr(defaults, name))
        for name in ResoSettings.__dataclass_fields__
        if name in values
    }
    return replace(defaults, **kwargs)


def load_reso_settings(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ResoSettings:
    """Load settings from ``config.json`` then apply environment overrides.

    Args:
        config_path: Optional path to the JSON configuration file.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        The resolved :class:`ResoSettings`.
    """
    cfg = load_config(config_path)
    section = cfg.get("reso", {}) if isinstance(cfg.get("reso", {}), dict) else {}
    merged: dict[str, Any] = dict(section)
    env = os.environ if environ is None else environ
    for env_name, attribute in ENV_OVERRIDES.items():
        value = env.get(env_name)
        if value:
            merged[attribute] = value
    return settings_from_mapping(merged)


__all__ = [
    "DEFAULT_FULL_SYNC_BATCH_SIZE",
    "DEFAULT_HOME_REGION",
    "DEFAULT_PROPERTIES_BATCH_SIZE",
    "ResoSettings",
    "load_config",
    "load_reso_settings",
    "settings_from_mapping",
]
