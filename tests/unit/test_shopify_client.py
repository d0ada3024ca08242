# tests/unit/test_shopify_client.py
"""Unit tests for ShopifyClient over httpx.MockTransport (no network)."""
import json

import httpx
import pytest

from src.op_common.errors import (
    UPSTREAM_UNREACHABLE_MESSAGE,
    NoFulfillmentOrderError,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamUnavailableError,
)
from src.op_shopify.domain.models import TrackingInfo
from src.op_shopify.infrastructure.client import ShopifyClient

ORDER = {
    "id": 450789469,
    "order_number": 1001,
    "name": "#1001",
    "created_at": "2026-01-05T10:00:00-03:00",
    "total_price": "15990.00",
    "fulfillment_status": None,
    "line_items": [{"id": 1, "title": "Polera", "quantity": 1, "price": "15990.00"}],
}


def _client(handler) -> ShopifyClient:
    return ShopifyClient(
        shop="tienda.myshopify.com",
        access_token="shpat_test",
        api_version="2024-01",
        transport=httpx.MockTransport(handler),
    )


class TestRequests:
    @pytest.mark.asyncio
    async def test_list_orders_url_headers_and_params(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"orders": [ORDER]})

        orders = await _client(handler).list_orders(limit=50)

        assert len(orders) == 1
        assert orders[0].name == "#1001"
        req = seen[0]
        assert req.url.path == "/admin/api/2024-01/orders.json"
        assert req.url.params["status"] == "any"
        assert req.url.params["limit"] == "50"
        assert req.headers["X-Shopify-Access-Token"] == "shpat_test"

    @pytest.mark.asyncio
    async def test_get_shop(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"shop": {"name": "Tienda", "domain": "tienda.cl",
                                                      "currency": "CLP"}})

        shop = await _client(handler).get_shop()
        assert shop.currency == "CLP"


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await _client(handler).list_orders()
        assert exc_info.value.message == UPSTREAM_UNREACHABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"errors": "Not Found"})

        with pytest.raises(UpstreamNotFoundError):
            await _client(handler).get_order(1)

    @pytest.mark.asyncio
    async def test_upstream_message_surfaced(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"errors": "[API] Invalid API key or access token"})

        with pytest.raises(UpstreamError) as exc_info:
            await _client(handler).list_orders()
        assert exc_info.value.upstream_status == 401
        assert exc_info.value.message == (
            "Shopify API Error: 401 - [API] Invalid API key or access token"
        )

    @pytest.mark.asyncio
    async def test_structured_errors_serialised(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, json={"errors": {"base": ["already fulfilled"]}})

        with pytest.raises(UpstreamError) as exc_info:
            await _client(handler).list_orders()
        assert "already fulfilled" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_json_error_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="Internal Server Error")

        with pytest.raises(UpstreamError) as exc_info:
            await _client(handler).list_orders()
        assert exc_info.value.message == "Shopify API Error: 500 - Internal Server Error"


class TestMarkFulfilled:
    @pytest.mark.asyncio
    async def test_posts_first_fulfillment_order(self) -> None:
        posted: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json={"fulfillment_orders": [
                    {"id": 11, "status": "open"}, {"id": 12, "status": "open"},
                ]})
            posted.append(json.loads(request.content))
            return httpx.Response(201, json={"fulfillment": {"id": 99, "status": "success"}})

        tracking = TrackingInfo(number="CX123", company="Chilexpress", notify=False)
        result = await _client(handler).mark_fulfilled(1001, tracking)

        assert result == {"id": 99, "status": "success"}
        body = posted[0]["fulfillment"]
        assert body["line_items_by_fulfillment_order"] == [{"fulfillment_order_id": 11}]
        assert body["tracking_info"] == {"number": "CX123", "url": None, "company": "Chilexpress"}
        assert body["notify_customer"] is False

    @pytest.mark.asyncio
    async def test_no_fulfillment_orders(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"fulfillment_orders": []})

        with pytest.raises(NoFulfillmentOrderError):
            await _client(handler).mark_fulfilled(1001, TrackingInfo())
