"""Pydantic settings loaded from YAML configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, SecretStr

_settings: Settings | None = None

_DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


class PolicyConfig(BaseModel):
    """Authorization policy knobs for the lifecycle engine."""

    # Lets a non-admin initiator resolve the alert they raised.
    allow_initiator_resolve: bool = False


class ProtocolConfig(BaseModel):
    """Placeholders substituted into protocol announcements."""

    evacuation_location: str = "Main Parking Lot"
    shelter_hazard: str = "Tornado"


class StorageConfig(BaseModel):
    """Key-value store backing the current alert and history slots."""

    backend: Literal["memory", "file"] = "file"
    path: str = "data/alerts.json"


class WebhookConfig(BaseModel):
    """Chat webhook notification channel configuration."""

    enabled: bool = False
    url: SecretStr = SecretStr("")
    username: str = "School Alerts"


class NotificationsConfig(BaseModel):
    """Notification sink configuration."""

    log_only: bool = False
    webhook: WebhookConfig = WebhookConfig()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """Root settings container."""

    policy: PolicyConfig = PolicyConfig()
    protocol: ProtocolConfig = ProtocolConfig()
    storage: StorageConfig = StorageConfig()
    notifications: NotificationsConfig = NotificationsConfig()
    logging: LoggingConfig = LoggingConfig()


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file and cache globally.

    Args:
        path: Path to YAML config. Defaults to config/settings.yaml.

    Returns:
        Parsed Settings instance.
    """
    global _settings  # noqa: PLW0603

    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if isinstance(raw, dict):
                data = raw

    _settings = Settings(**data)
    return _settings


def get_settings() -> Settings:
    """Return the cached settings, loading defaults if not yet loaded."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset the cached settings (useful for testing)."""
    global _settings  # noqa: PLW0603
    _settings = None
