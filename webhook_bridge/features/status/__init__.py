"""Status feature: ``/health`` and ``/debug``."""

from webhook_bridge.features.status.router import router

__all__ = ["router"]
