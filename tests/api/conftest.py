"""Pytest fixtures for API tests.

Provides a TestClient running the real app lifespan against a test
environment, with the Shopify and Notion clients swapped for clients
served by the in-memory fakes.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_notion_client, get_shopify_client
from src.api.main import app
from src.api.middleware.auth import reset_rate_limiter
from src.external_sources.clients.notion import NotionClient
from src.external_sources.clients.shopify import ShopifyClient
from src.services.magic_link import MagicLinkCodec
from tests.helpers import (
    NOTION_DATABASE_ID,
    STORE_DOMAIN,
    TEST_ENV,
    TEST_SECRET,
    FakeNotionAPI,
    FakeShopifyAPI,
)


@pytest.fixture
def test_env(monkeypatch) -> dict[str, str]:
    """Set the environment the app lifespan reads its config from."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("TOKEN_TTL_DAYS", raising=False)
    monkeypatch.delenv("TRACKER_TRUST_PROXY", raising=False)
    return TEST_ENV


@pytest.fixture
def client(
    test_env: dict[str, str],
    shopify_api: FakeShopifyAPI,
    notion_api: FakeNotionAPI,
) -> Generator[TestClient, None, None]:
    """Create a TestClient with the external clients overridden.

    Yields:
        TestClient configured for testing.
    """
    shopify = ShopifyClient(
        STORE_DOMAIN, "shpat_test_token", transport=shopify_api.transport()
    )
    notion = NotionClient(
        "secret_notion_test", NOTION_DATABASE_ID, transport=notion_api.transport()
    )
    app.dependency_overrides[get_shopify_client] = lambda: shopify
    app.dependency_overrides[get_notion_client] = lambda: notion
    reset_rate_limiter()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_rate_limiter()


@pytest.fixture
def codec() -> MagicLinkCodec:
    """Codec sharing the app's signing secret."""
    return MagicLinkCodec(TEST_SECRET)
