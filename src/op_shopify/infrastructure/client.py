"""ShopifyClient — OrderDataSourceProtocol over the Shopify Admin REST API.

One shared httpx.AsyncClient per process, created lazily and closed in the
app lifespan. Errors are translated once, here:

  no response (connect/timeout/...)  → UpstreamUnavailableError
  404                                → UpstreamNotFoundError
  any other non-2xx                  → UpstreamError(status, upstream message)
"""

import json
import logging
from typing import Any

import httpx

from config.settings import settings
from src.op_common.errors import (
    NoFulfillmentOrderError,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamUnavailableError,
)
from src.op_shopify.domain.models import (
    Customer,
    FulfillmentOrder,
    Order,
    Product,
    Shop,
    TrackingInfo,
)
from src.op_shopify.infrastructure import mapper

logger = logging.getLogger(__name__)


def _error_detail(resp: httpx.Response) -> str:
    """Best human-readable message from a Shopify error body."""
    try:
        body = resp.json()
    except (json.JSONDecodeError, ValueError):
        return resp.text
    if isinstance(body, dict):
        errors = body.get("errors") or body.get("error") or body.get("message")
        if isinstance(errors, str):
            return errors
        if errors:
            return json.dumps(errors, ensure_ascii=False)
    return resp.text


class ShopifyClient:
    def __init__(
        self,
        shop: str,
        access_token: str,
        api_version: str = "2024-01",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.shop = shop
        self.api_version = api_version
        self._client = httpx.AsyncClient(
            base_url=f"https://{shop}/admin/api/{api_version}",
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "X-Shopify-Access-Token": access_token,
            },
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            resp = await self._client.request(method, path, params=params, json=body)
        except httpx.RequestError as exc:
            logger.error("Shopify %s %s unreachable: %s", method, path, exc)
            raise UpstreamUnavailableError() from exc

        if resp.status_code == 404:
            raise UpstreamNotFoundError(path)
        if resp.status_code >= 400:
            detail = _error_detail(resp)
            logger.error("Shopify %s %s → %d: %s", method, path, resp.status_code, detail)
            raise UpstreamError(
                resp.status_code, f"Shopify API Error: {resp.status_code} - {detail}"
            )
        return resp.json()

    # --- Orders ---

    async def list_orders(self, status: str = "any", limit: int = 250) -> list[Order]:
        data = await self._request("GET", "/orders.json", params={"status": status, "limit": limit})
        return [mapper.to_order(o) for o in data.get("orders", [])]

    async def get_order(self, order_id: int) -> Order:
        data = await self._request("GET", f"/orders/{order_id}.json")
        return mapper.to_order(data["order"])

    async def list_fulfillment_orders(self, order_id: int) -> list[FulfillmentOrder]:
        data = await self._request("GET", f"/orders/{order_id}/fulfillment_orders.json")
        return [mapper.to_fulfillment_order(fo) for fo in data.get("fulfillment_orders", [])]

    async def mark_fulfilled(self, order_id: int, tracking: TrackingInfo) -> dict:
        """Fulfil every open line via the order's first fulfillment order."""
        fulfillment_orders = await self.list_fulfillment_orders(order_id)
        if not fulfillment_orders:
            raise NoFulfillmentOrderError(order_id)

        payload = {
            "fulfillment": {
                "line_items_by_fulfillment_order": [
                    {"fulfillment_order_id": fulfillment_orders[0].id}
                ],
                "tracking_info": {
                    "number": tracking.number,
                    "url": tracking.url,
                    "company": tracking.company,
                },
                "notify_customer": tracking.notify,
            }
        }
        data = await self._request("POST", "/fulfillments.json", body=payload)
        logger.info("Order %s fulfilled (fulfillment order %s)", order_id, fulfillment_orders[0].id)
        return data.get("fulfillment") or {}

    # --- Products / customers / shop ---

    async def list_products(self, limit: int = 50) -> list[Product]:
        data = await self._request("GET", "/products.json", params={"limit": limit})
        return [mapper.to_product(p) for p in data.get("products", [])]

    async def list_customers(self, limit: int = 50) -> list[Customer]:
        data = await self._request("GET", "/customers.json", params={"limit": limit})
        customers = (mapper.to_customer(c) for c in data.get("customers", []))
        return [c for c in customers if c is not None]

    async def get_shop(self) -> Shop:
        data = await self._request("GET", "/shop.json")
        return mapper.to_shop(data["shop"])


_client: ShopifyClient | None = None


def get_shopify_client() -> ShopifyClient:
    """FastAPI dependency: process-wide ShopifyClient built from settings."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = ShopifyClient(
            shop=settings.SHOPIFY_SHOP,
            access_token=settings.SHOPIFY_ACCESS_TOKEN,
            api_version=settings.SHOPIFY_API_VERSION,
            timeout=settings.SHOPIFY_TIMEOUT_SECONDS,
        )
    return _client


async def close_shopify_client() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None
