"""Modular Pydantic Settings v2 configuration.

Settings are split by domain and follow 12-factor principles:
- Environment variables (and an optional .env file) are the single source
- Immutable (frozen) settings models
- SecretStr for the webhook token
- LRU-cached loaders

Import settings via cached loaders:
    from webhook_bridge.core.settings import get_rabbit_settings

Or use unified settings:
    from webhook_bridge.core.settings import get_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .loader import (
    clear_all_caches,
    get_app_settings,
    get_logging_settings,
    get_rabbit_settings,
)
from .rabbit import RECONNECT_INTERVAL_SECONDS
from .unified import Settings, get_settings

__all__ = [
    "RECONNECT_INTERVAL_SECONDS",
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_logging_settings",
    "get_rabbit_settings",
    "get_settings",
]
