"""Notion tracking-database client.

Queries and creates status records in the Notion database that staff use
to track boot and blade fulfillment. Page shapes are translated by
src.external_sources.notion_properties.
"""

import logging
from typing import Any

import httpx

from src.errors import UpstreamError
from src.external_sources import notion_properties as props
from src.external_sources.clients.base import DEFAULT_TIMEOUT_SECONDS, ExternalClient
from src.external_sources.models import StatusRecord

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "#"


class NotionClient(ExternalClient):
    """Notion REST API client bound to one database.

    Example:
        client = NotionClient("secret_xxxx", "0123abcd...")
        records = await client.fetch_status("1042")
    """

    API_BASE = "https://api.notion.com/v1"
    NOTION_VERSION = "2022-06-28"

    def __init__(
        self,
        api_key: str,
        database_id: str,
        notion_version: str = NOTION_VERSION,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self._api_key = api_key
        self._database_id = database_id
        self._notion_version = notion_version

    @property
    def source_name(self) -> str:
        return "notion"

    def _base_url(self) -> str:
        return self.API_BASE

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Notion-Version": self._notion_version,
            "Content-Type": "application/json",
        }

    async def query_by_order_number(self, order_number: str) -> list[StatusRecord]:
        """Return records whose Order Number equals ``order_number`` exactly."""
        data = await self._request(
            "POST",
            f"/databases/{self._database_id}/query",
            json={"filter": props.order_number_filter(order_number)},
        )
        pages = data.get("results", []) if isinstance(data, dict) else []
        return [props.map_status_record(page) for page in pages]

    async def fetch_status(self, order_number: str) -> list[StatusRecord]:
        """Find status records for an order, tolerating the '#' convention.

        Staff have entered order numbers both bare ("1042") and as Shopify
        names ("#1042"). When the bare form finds nothing, the prefixed form
        is tried. The reverse is not attempted.

        Args:
            order_number: Order number as carried by the token or request.

        Returns:
            Matching records in database order; empty when none match.

        Raises:
            UpstreamError: If a Notion request fails.
        """
        records = await self.query_by_order_number(order_number)
        if records or order_number.startswith(ORDER_NUMBER_PREFIX):
            return records

        prefixed = f"{ORDER_NUMBER_PREFIX}{order_number}"
        logger.debug("No status record for %s, retrying as %s", order_number, prefixed)
        return await self.query_by_order_number(prefixed)

    async def create_status_record(
        self,
        order_number: str,
        customer_name: str,
        customer_email: str,
        boot_model: str,
        initial_status: str,
        reviewed_on: str,
    ) -> str:
        """Create a status record page and return its ID.

        Only columns present in the tracking database are written; the
        optional "Model of Blade" column is read but never written.

        Raises:
            UpstreamError: If the Notion request fails or returns no ID.
        """
        properties: dict[str, Any] = {
            props.ORDER_NUMBER: props.text_value(order_number),
            props.CUSTOMER_NAME: props.title_value(customer_name),
            props.CONTACT_DETAILS: props.text_value(customer_email),
            props.BOOT_MODEL: props.text_value(boot_model),
            props.SIZE: props.text_value(""),
            props.BOOT_STATUS: props.select_value(initial_status),
            props.BLADE_STATUS: props.select_value(initial_status),
            props.LAST_REVIEWED: props.date_value(reviewed_on),
        }
        data = await self._request(
            "POST",
            "/pages",
            json={
                "parent": {"database_id": self._database_id},
                "properties": properties,
            },
        )
        page_id = data.get("id") if isinstance(data, dict) else None
        if not page_id:
            raise UpstreamError(self.source_name, "Page creation returned no ID")
        logger.info("Created Notion status record %s for order %s", page_id, order_number)
        return page_id
