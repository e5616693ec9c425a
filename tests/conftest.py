"""Root-level pytest fixtures for all tests.

Provides:
- In-memory Shopify and Notion API fakes
- Real clients wired to those fakes through httpx.MockTransport
- A fixed signing secret
"""

from collections.abc import AsyncGenerator

import pytest

from src.external_sources.clients.notion import NotionClient
from src.external_sources.clients.shopify import ShopifyClient
from tests.helpers import (
    NOTION_DATABASE_ID,
    STORE_DOMAIN,
    TEST_SECRET,
    FakeNotionAPI,
    FakeShopifyAPI,
)


@pytest.fixture
def secret() -> str:
    return TEST_SECRET


@pytest.fixture
def shopify_api() -> FakeShopifyAPI:
    return FakeShopifyAPI()


@pytest.fixture
def notion_api() -> FakeNotionAPI:
    return FakeNotionAPI()


@pytest.fixture
async def shopify_client(
    shopify_api: FakeShopifyAPI,
) -> AsyncGenerator[ShopifyClient, None]:
    """ShopifyClient whose HTTP traffic is served by shopify_api."""
    client = ShopifyClient(
        STORE_DOMAIN, "shpat_test_token", transport=shopify_api.transport()
    )
    yield client
    await client.aclose()


@pytest.fixture
async def notion_client(
    notion_api: FakeNotionAPI,
) -> AsyncGenerator[NotionClient, None]:
    """NotionClient whose HTTP traffic is served by notion_api."""
    client = NotionClient(
        "secret_notion_test", NOTION_DATABASE_ID, transport=notion_api.transport()
    )
    yield client
    await client.aclose()
