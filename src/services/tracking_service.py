"""Builds the customer-facing tracking view for one order.

Fetches the Shopify order and the Notion status records concurrently and
reconciles them. Either fetch failing fails the whole request; there is no
partial result and no retry.
"""

import asyncio
import logging

from src.errors import NotFoundError
from src.external_sources.clients.notion import NotionClient
from src.external_sources.clients.shopify import ShopifyClient
from src.external_sources.models import TrackingResponse
from src.services.reconciliation import reconcile

logger = logging.getLogger(__name__)


class TrackingService:
    """Correlates commerce orders with fulfillment status records."""

    def __init__(self, shopify: ShopifyClient, notion: NotionClient) -> None:
        self._shopify = shopify
        self._notion = notion

    async def track(self, order_number: str) -> TrackingResponse:
        """Return the tracking view for ``order_number``.

        Raises:
            NotFoundError: If Shopify has no such order or Notion has no
                status record for it.
            UpstreamError: If either external call fails.
        """
        order, records = await asyncio.gather(
            self._shopify.fetch_order(order_number),
            self._notion.fetch_status(order_number),
        )

        if order is None or not records:
            logger.info(
                "Tracking miss for %s (order found: %s, status records: %d)",
                order_number,
                order is not None,
                len(records),
            )
            raise NotFoundError.from_code("E-2001", order_number=order_number)

        if len(records) > 1:
            logger.warning(
                "%d status records share order %s, using %s",
                len(records),
                order_number,
                records[0].id,
            )

        return TrackingResponse(
            order_number=order.order_number,
            customer_name=order.customer_name,
            order_date=order.order_date,
            items=reconcile(order, records[0]),
        )
