"""Test helper utilities."""

from tests.helpers.environment import ADMIN_KEY, BASE_URL, TEST_ENV, TEST_SECRET
from tests.helpers.fake_upstreams import (
    NOTION_DATABASE_ID,
    STORE_DOMAIN,
    FakeNotionAPI,
    FakeShopifyAPI,
    notion_page,
    shopify_order,
)

__all__ = [
    "ADMIN_KEY",
    "BASE_URL",
    "FakeNotionAPI",
    "FakeShopifyAPI",
    "NOTION_DATABASE_ID",
    "STORE_DOMAIN",
    "TEST_ENV",
    "TEST_SECRET",
    "notion_page",
    "shopify_order",
]
