"""Webhook ingestion feature.

Receives arbitrary HTTP requests on ``/webhook`` and republishes them as
persistent JSON envelopes onto a caller-named fanout exchange.

    >>> from webhook_bridge.features.webhooks import router
"""

from webhook_bridge.features.webhooks.router import router

__all__ = ["router"]
