"""Shopify order client.

Reads orders from the Shopify Admin API by their human-readable order
name (e.g. "#1042") and normalizes them into OrderRecord.
"""

import logging

import httpx

from src.external_sources.clients.base import DEFAULT_TIMEOUT_SECONDS, ExternalClient
from src.external_sources.models import OrderLineItem, OrderRecord

logger = logging.getLogger(__name__)


class ShopifyClient(ExternalClient):
    """Shopify Admin API client for order lookups.

    Example:
        client = ShopifyClient("mystore.myshopify.com", "shpat_xxxx")
        order = await client.fetch_order("#1042")
    """

    # Shopify Admin API version
    API_VERSION = "2024-01"

    def __init__(
        self,
        store_domain: str,
        access_token: str,
        api_version: str = API_VERSION,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self._store_domain = store_domain
        self._access_token = access_token
        self._api_version = api_version

    @property
    def source_name(self) -> str:
        return "shopify"

    def _base_url(self) -> str:
        return f"https://{self._store_domain}/admin/api/{self._api_version}"

    def _headers(self) -> dict[str, str]:
        return {
            "X-Shopify-Access-Token": self._access_token,
            "Content-Type": "application/json",
        }

    async def fetch_order(self, order_number: str) -> OrderRecord | None:
        """Get a single order by its order name.

        Args:
            order_number: Human-readable order number, not the internal ID.

        Returns:
            The first matching order, or None when nothing matches.

        Raises:
            UpstreamError: If the Shopify request fails.
        """
        data = await self._request(
            "GET",
            "/orders.json",
            params={"name": order_number, "status": "any"},
        )
        orders = data.get("orders") if isinstance(data, dict) else None
        if not orders:
            logger.info("Shopify has no order named %s", order_number)
            return None
        return self._normalize_order(orders[0])

    def _normalize_order(self, shopify_order: dict) -> OrderRecord:
        """Convert Shopify order format to OrderRecord.

        Args:
            shopify_order: Raw Shopify order data from API

        Returns:
            Normalized OrderRecord
        """
        customer = shopify_order.get("customer") or {}

        # Build customer name from first/last
        customer_first = customer.get("first_name") or ""
        customer_last = customer.get("last_name") or ""
        customer_name = f"{customer_first} {customer_last}".strip()

        line_items = [
            OrderLineItem(
                id=str(item.get("id", "")),
                title=item.get("title") or "",
                variant=item.get("variant_title"),
                quantity=item.get("quantity", 1),
                sku=item.get("sku"),
                properties=item.get("properties") or [],
            )
            for item in shopify_order.get("line_items") or []
        ]

        return OrderRecord(
            order_number=str(shopify_order.get("name", "")),
            customer_name=customer_name,
            customer_email=customer.get("email"),
            order_date=shopify_order.get("created_at"),
            line_items=line_items,
        )
