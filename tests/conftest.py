"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: environment isolation and cache resets
    - Broker Fixtures: a fake BrokerGateway for HTTP tests
    - Application Fixtures: FastAPI app and HTTP client

The HTTP fixtures never start the application lifespan (httpx's
ASGITransport does not send lifespan events), so no RabbitMQ connection is
attempted. Routes receive the fake gateway through dependency overrides.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
import os
from unittest.mock import AsyncMock, MagicMock

from httpx import ASGITransport, AsyncClient
import pytest

from tests.fixtures.broker import make_status
from webhook_bridge.core.dependencies.messaging import get_optional_broker_gateway
from webhook_bridge.core.settings import clear_all_caches

# Ensure tests run without external infrastructure
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

TEST_TOKEN = "test-token"

_ISOLATED_ENV = (
    "AUTH_TOKEN",
    "APP_AUTH_TOKEN",
    "PORT",
    "APP_PORT",
    "RABBITMQ_URL",
    "RABBITMQ_VHOST",
    "MAX_RECONNECT_ATTEMPTS",
    "RABBITMQ_MAX_RECONNECT_ATTEMPTS",
    "RABBITMQ_STARTUP_REQUIRE_RABBIT",
)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Give every test a clean configuration with only the webhook token set.

    Example:
        def test_with_vhost(monkeypatch):
            monkeypatch.setenv("RABBITMQ_VHOST", "hooks")
            clear_all_caches()
    """
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AUTH_TOKEN", TEST_TOKEN)
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Broker Fixtures
# ============================================================================


@pytest.fixture
def gateway() -> MagicMock:
    """Fake BrokerGateway with a healthy link.

    Flip ``gateway.is_available`` to simulate an outage; broker calls are
    AsyncMocks so tests can inject failures via ``side_effect``.
    """
    fake = MagicMock(name="BrokerGateway")
    fake.is_available = True
    fake.attempt_count = 0
    fake.max_attempts = 10
    fake.status.return_value = make_status()
    fake.schedule_reconnect.return_value = True
    fake.ensure_exchange = AsyncMock(name="ensure_exchange")
    fake.publish = AsyncMock(name="publish")
    return fake


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(gateway: MagicMock):
    """Create a FastAPI application wired to the fake gateway.

    Example:
        async def test_routes(app):
            assert any(route.path == "/webhook" for route in app.routes)
    """
    from webhook_bridge.app.main import create_app

    application = create_app()
    application.dependency_overrides[get_optional_broker_gateway] = lambda: gateway
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing.

    Example:
        async def test_health_check(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
