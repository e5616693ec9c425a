"""External record client implementations."""

from src.external_sources.clients.base import ExternalClient
from src.external_sources.clients.notion import NotionClient
from src.external_sources.clients.shopify import ShopifyClient

__all__ = [
    "ExternalClient",
    "NotionClient",
    "ShopifyClient",
]
