# src/op_shopify/domain/source.py
"""OrderDataSource Protocol — the only way the core talks to Shopify.

Unit tests inject an AsyncMock that conforms to this Protocol.
Infrastructure layer provides the real implementation (ShopifyClient).

Every method may raise UpstreamUnavailableError (no response) or
UpstreamError (non-2xx, message surfaced verbatim). Nothing retries.
"""

from typing import Protocol

from src.op_shopify.domain.models import (
    Customer,
    FulfillmentOrder,
    Order,
    Product,
    Shop,
    TrackingInfo,
)


class OrderDataSourceProtocol(Protocol):
    async def list_orders(self, status: str = "any", limit: int = 250) -> list[Order]: ...

    async def get_order(self, order_id: int) -> Order: ...

    async def mark_fulfilled(self, order_id: int, tracking: TrackingInfo) -> dict: ...

    async def list_fulfillment_orders(self, order_id: int) -> list[FulfillmentOrder]: ...

    async def list_products(self, limit: int = 50) -> list[Product]: ...

    async def list_customers(self, limit: int = 50) -> list[Customer]: ...

    async def get_shop(self) -> Shop: ...
