"""Integration-test fixtures.

The app runs for real (routers, middleware, error handler); only the two
outer dependencies are swapped: Shopify for an in-memory FakeShopify and
the override store for a fresh in-memory store per test.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from src.main import app
from src.op_common.enums import FulfillmentStatus
from src.op_common.errors import UpstreamError, UpstreamNotFoundError
from src.op_overrides.application.store import AddressOverrideStore
from src.op_overrides.infrastructure.factory import get_override_store
from src.op_overrides.infrastructure.redis_storage import InMemoryOverrideStorage
from src.op_shopify.domain.models import (
    Customer,
    FulfillmentOrder,
    LineItem,
    Order,
    Product,
    ProductVariant,
    ShippingAddress,
    Shop,
    TrackingInfo,
)
from src.op_shopify.infrastructure.client import get_shopify_client


class FakeShopify:
    """OrderDataSourceProtocol backed by a list of orders."""

    def __init__(self, orders: list[Order]) -> None:
        self.orders = orders
        self.fail_ids: set[int] = set()
        self.fulfilled: dict[int, TrackingInfo] = {}

    def _find(self, order_id: int) -> Order:
        for order in self.orders:
            if order.id == order_id:
                return order
        raise UpstreamNotFoundError(f"/orders/{order_id}.json")

    async def list_orders(self, status: str = "any", limit: int = 250) -> list[Order]:
        return self.orders[:limit]

    async def get_order(self, order_id: int) -> Order:
        return self._find(order_id)

    async def list_fulfillment_orders(self, order_id: int) -> list[FulfillmentOrder]:
        self._find(order_id)
        return [FulfillmentOrder(id=order_id * 10, status="open")]

    async def mark_fulfilled(self, order_id: int, tracking: TrackingInfo) -> dict:
        self._find(order_id)
        if order_id in self.fail_ids:
            raise UpstreamError(422, f"Shopify API Error: 422 - order {order_id} is closed")
        self.fulfilled[order_id] = tracking
        return {"id": order_id * 100, "status": "success"}

    async def list_products(self, limit: int = 50) -> list[Product]:
        return [
            Product(id=1, title="Polera", variants=[
                ProductVariant(id=11, title="S", price=Decimal("7995"), inventory_quantity=3),
            ]),
            Product(id=2, title="Taza", variants=[
                ProductVariant(id=21, title="Única", price=Decimal("4990"), inventory_quantity=0),
            ]),
        ][:limit]

    async def list_customers(self, limit: int = 50) -> list[Customer]:
        return [Customer(id=10, first_name="Ana", last_name="Pérez", email="ana@example.com",
                         orders_count=2)][:limit]

    async def get_shop(self) -> Shop:
        return Shop(name="Tienda Test", email="hola@tienda.cl", domain="tienda.cl",
                    currency="CLP", timezone="America/Santiago")


def _make_orders() -> list[Order]:
    now = datetime.now(UTC)
    ana = Customer(id=10, first_name="Ana", last_name="Pérez", email="ana@example.com")
    luis = Customer(id=11, first_name="Luis", last_name="Soto", email="luis@example.com")
    return [
        Order(
            id=1, order_number=1001, name="#1001", created_at=now - timedelta(days=1),
            total_price=Decimal("15990"), customer=ana,
            shipping_address=ShippingAddress(first_name="Ana", last_name="Pérez",
                                             address1="Av. Italia 10", city="Santiago"),
            line_items=[LineItem(title="Polera", quantity=2, price=Decimal("7995"))],
        ),
        Order(
            id=2, order_number=1002, name="#1002", created_at=now - timedelta(days=3),
            total_price=Decimal("90000"), customer=luis,
            fulfillment_status=FulfillmentStatus.UNFULFILLED,
            shipping_address=ShippingAddress(first_name="Luis", last_name="Soto",
                                             address1="Los Leones 55", city="Providencia"),
            line_items=[LineItem(title="Mesa roble PEDIDO", quantity=1, price=Decimal("90000"))],
        ),
        Order(
            id=3, order_number=1003, name="#1003", created_at=now - timedelta(days=20),
            total_price=Decimal("4990"), customer=ana,
            fulfillment_status=FulfillmentStatus.FULFILLED,
            shipping_address=None,
            line_items=[LineItem(title="Taza", quantity=1, price=Decimal("4990"))],
        ),
    ]


@pytest.fixture
def shopify() -> FakeShopify:
    return FakeShopify(_make_orders())


@pytest.fixture
def override_store() -> AddressOverrideStore:
    return AddressOverrideStore(InMemoryOverrideStorage())


@pytest.fixture(autouse=True)
def wired_app(shopify, override_store):
    app.dependency_overrides[get_shopify_client] = lambda: shopify
    app.dependency_overrides[get_override_store] = lambda: override_store
    yield app
    app.dependency_overrides.clear()
