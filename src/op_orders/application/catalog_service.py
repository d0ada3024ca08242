"""CatalogService — read-only products, customers, shop and the dashboard."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from src.op_common.datetime_utils import utc_now
from src.op_orders.application.schemas import (
    CustomerListItem,
    DashboardResponse,
    ProductOut,
    ShopOut,
)
from src.op_orders.domain.dashboard import build_dashboard
from src.op_shopify.domain.source import OrderDataSourceProtocol

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(
        self,
        source: OrderDataSourceProtocol,
        store_timezone: str = "UTC",
        fetch_limit: int = 250,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._source = source
        self._tz = ZoneInfo(store_timezone)
        self._fetch_limit = fetch_limit
        self._clock = clock

    async def list_products(self, limit: int = 50) -> list[ProductOut]:
        return [ProductOut.from_domain(p) for p in await self._source.list_products(limit=limit)]

    async def list_customers(self, limit: int = 50) -> list[CustomerListItem]:
        return [CustomerListItem.from_domain(c) for c in await self._source.list_customers(limit=limit)]

    async def get_shop(self) -> ShopOut:
        return ShopOut.from_domain(await self._source.get_shop())

    async def dashboard(self) -> DashboardResponse:
        # Three independent reads; the first failure propagates
        orders, products, customers = await asyncio.gather(
            self._source.list_orders(status="any", limit=self._fetch_limit),
            self._source.list_products(limit=self._fetch_limit),
            self._source.list_customers(limit=self._fetch_limit),
        )
        now = self._clock().astimezone(self._tz)
        snapshot = build_dashboard(orders, products, customers, now)
        logger.debug(
            "Dashboard built from %d orders, %d products, %d customers",
            len(orders), len(products), len(customers),
        )
        return DashboardResponse.from_domain(snapshot)
