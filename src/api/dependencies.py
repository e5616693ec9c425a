"""FastAPI dependency providers.

Long-lived objects (config, external clients) are built once in the app
lifespan and kept on ``app.state``. Route handlers receive them, and the
services built from them, through these providers; tests override them
via ``app.dependency_overrides``.
"""

from datetime import timedelta

from fastapi import Depends, Request

from src.config import TrackerConfig
from src.external_sources.clients.notion import NotionClient
from src.external_sources.clients.shopify import ShopifyClient
from src.services.magic_link import MagicLinkCodec
from src.services.provisioning import RecordProvisioner
from src.services.tracking_service import TrackingService


def get_config(request: Request) -> TrackerConfig:
    """Dependency to get the process-wide TrackerConfig."""
    return request.app.state.config


def get_shopify_client(request: Request) -> ShopifyClient:
    """Dependency to get the shared ShopifyClient."""
    return request.app.state.shopify_client


def get_notion_client(request: Request) -> NotionClient:
    """Dependency to get the shared NotionClient."""
    return request.app.state.notion_client


def get_magic_link_codec(
    config: TrackerConfig = Depends(get_config),
) -> MagicLinkCodec:
    """Dependency to get a MagicLinkCodec bound to the configured secret."""
    return MagicLinkCodec(config.secret_key, ttl=timedelta(days=config.token_ttl_days))


def get_tracking_service(
    shopify: ShopifyClient = Depends(get_shopify_client),
    notion: NotionClient = Depends(get_notion_client),
) -> TrackingService:
    """Dependency to get TrackingService instance."""
    return TrackingService(shopify, notion)


def get_record_provisioner(
    notion: NotionClient = Depends(get_notion_client),
) -> RecordProvisioner:
    """Dependency to get RecordProvisioner instance."""
    return RecordProvisioner(notion)
