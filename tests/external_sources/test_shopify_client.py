"""Test Shopify order client."""

import httpx
import pytest

from src.errors import UpstreamError
from src.external_sources.clients.base import ExternalClient
from src.external_sources.clients.shopify import ShopifyClient
from tests.helpers import STORE_DOMAIN, shopify_order


class TestShopifyClientInit:
    """Test ShopifyClient construction."""

    def test_extends_external_client(self):
        assert issubclass(ShopifyClient, ExternalClient)

    def test_source_name(self):
        assert ShopifyClient(STORE_DOMAIN, "token").source_name == "shopify"


class TestFetchOrder:
    """Test order lookup by name."""

    @pytest.mark.asyncio
    async def test_request_shape(self, shopify_client, shopify_api):
        """Lookup hits orders.json with name and status=any plus the token header."""
        await shopify_client.fetch_order("#1042")

        (request,) = shopify_api.requests
        assert request.method == "GET"
        assert request.url.host == STORE_DOMAIN
        assert request.url.path == "/admin/api/2024-01/orders.json"
        assert request.url.params["name"] == "#1042"
        assert request.url.params["status"] == "any"
        assert request.headers["X-Shopify-Access-Token"] == "shpat_test_token"

    @pytest.mark.asyncio
    async def test_normalizes_order(self, shopify_client, shopify_api):
        shopify_api.orders.append(shopify_order("#1042"))

        order = await shopify_client.fetch_order("#1042")

        assert order is not None
        assert order.order_number == "#1042"
        assert order.customer_name == "Ada Skater"
        assert order.customer_email == "ada@example.com"
        assert order.order_date == "2025-02-10T09:15:00+00:00"
        assert [item.id for item in order.line_items] == ["111", "222"]
        assert order.line_items[0].title == "Edea Boots"
        assert order.line_items[0].variant == "UK 5"
        assert order.line_items[1].sku == "WIL-95"
        assert order.line_items[1].properties == [{"name": "Engraving", "value": "ADA"}]

    @pytest.mark.asyncio
    async def test_missing_customer_gives_empty_name(self, shopify_client, shopify_api):
        shopify_api.orders.append(shopify_order("#7", customer=None))

        order = await shopify_client.fetch_order("#7")

        assert order.customer_name == ""
        assert order.customer_email is None

    @pytest.mark.asyncio
    async def test_line_item_quantity_kept_as_sent(self, shopify_client, shopify_api):
        shopify_api.orders.append(
            shopify_order(
                "#8",
                line_items=[
                    {"id": 1, "title": "Edea Boots", "quantity": 0},
                    {"id": 2, "title": "Wilson Blade"},
                ],
            )
        )

        order = await shopify_client.fetch_order("#8")

        assert [item.quantity for item in order.line_items] == [0, 1]

    @pytest.mark.asyncio
    async def test_no_match_returns_none(self, shopify_client):
        assert await shopify_client.fetch_order("#9999") is None

    @pytest.mark.asyncio
    async def test_first_match_wins(self, shopify_client, shopify_api):
        shopify_api.orders.extend([
            shopify_order("#1042", customer={"first_name": "First"}),
            shopify_order("#1042", customer={"first_name": "Second"}),
        ])

        order = await shopify_client.fetch_order("#1042")

        assert order.customer_name == "First"


class TestErrors:
    """Every failure is surfaced as UpstreamError('shopify')."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 404, 429, 500, 503])
    async def test_non_2xx(self, shopify_client, shopify_api, status):
        shopify_api.fail_with_status = status

        with pytest.raises(UpstreamError) as exc_info:
            await shopify_client.fetch_order("#1042")

        assert exc_info.value.source == "shopify"
        assert exc_info.value.details["status_code"] == status

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = ShopifyClient(
            STORE_DOMAIN, "token", timeout=0.1, transport=httpx.MockTransport(handler)
        )
        try:
            with pytest.raises(UpstreamError) as exc_info:
                await client.fetch_order("#1042")
        finally:
            await client.aclose()

        assert exc_info.value.source == "shopify"

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        client = ShopifyClient(
            STORE_DOMAIN, "token", transport=httpx.MockTransport(handler)
        )
        try:
            with pytest.raises(UpstreamError):
                await client.fetch_order("#1042")
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_error_message_names_source(self, shopify_client, shopify_api):
        shopify_api.fail_with_status = 500

        with pytest.raises(UpstreamError) as exc_info:
            await shopify_client.fetch_order("#1042")

        assert "shopify" in str(exc_info.value)
