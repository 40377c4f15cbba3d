"""Pydantic settings loaded from YAML configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr

_settings: Settings | None = None

_DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


def _default_events() -> dict[str, bool]:
    return {"up": True, "down": True, "paused": False, "restarted": False}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"


class SmtpTransportConfig(BaseModel):
    """SMTP connection settings for the email notifier."""

    host: str = "localhost"
    port: int = 587
    username: str = ""
    password: SecretStr = SecretStr("")
    use_tls: bool = True
    timeout_secs: float = 20.0


class EmailMessageConfig(BaseModel):
    """Envelope defaults for outgoing notification emails."""

    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(default="", alias="from")
    to: str | list[str] = ""


class EmailConfig(BaseModel):
    """Email notifier configuration."""

    enabled: bool = False
    event: dict[str, bool] = Field(default_factory=_default_events)
    transport: SmtpTransportConfig = SmtpTransportConfig()
    message: EmailMessageConfig = EmailMessageConfig()


class WebhookConfig(BaseModel):
    """Chat webhook notifier configuration."""

    enabled: bool = False
    event: dict[str, bool] = Field(default_factory=_default_events)
    default_webhook: str = ""
    timeout_ms: int = 2000


class Settings(BaseModel):
    """Root settings container."""

    url: str = "http://localhost:8082"
    templates_dir: str | None = None
    # What to do when an entity has no parameter mapping at all.
    missing_params: Literal["continue", "abort"] = "continue"
    logging: LoggingConfig = LoggingConfig()
    email: EmailConfig = EmailConfig()
    webhook: WebhookConfig = WebhookConfig()


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
