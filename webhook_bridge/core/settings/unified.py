"""Unified settings composition for convenient access.

Usage:
    from webhook_bridge.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)
    print(settings.rabbit.max_reconnect_attempts)

Each nested settings object still loads from its own environment prefix
(APP_, RABBITMQ_, LOG_).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from .app import AppSettings
from .loader import get_app_settings, get_logging_settings, get_rabbit_settings
from .logs import LoggingSettings
from .rabbit import RabbitSettings


class Settings(BaseModel):
    """Unified settings composing all domain settings.

    Example:
        settings = Settings()
        assert settings.app.port == 3000
    """

    model_config = ConfigDict(frozen=True)

    app: AppSettings = Field(default_factory=get_app_settings)
    rabbit: RabbitSettings = Field(default_factory=get_rabbit_settings)
    logging: LoggingSettings = Field(default_factory=get_logging_settings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get unified settings instance (cached).

    Returns:
        Settings: Unified settings built from the cached domain loaders.
    """
    return Settings()
