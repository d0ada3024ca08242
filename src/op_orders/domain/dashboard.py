"""Dashboard aggregation — pure function over already-fetched records."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from src.op_shopify.domain.models import Customer, Order, Product

RECENT_ORDERS = 5
LOW_STOCK_MAX = 5
LOW_STOCK_ROWS = 5
RECURRING_MIN_ORDERS = 2


@dataclass(frozen=True)
class LowStockProduct:
    product: Product
    total_stock: int


@dataclass(frozen=True)
class DashboardSnapshot:
    today_orders: int
    today_revenue: Decimal
    pending_orders: int
    weekly_revenue: Decimal
    total_products: int
    active_products: int
    total_customers: int
    recurring_customers: int
    recent_orders: list[Order]
    low_stock: list[LowStockProduct]


def build_dashboard(
    orders: Sequence[Order],
    products: Sequence[Product],
    customers: Sequence[Customer],
    now: datetime,
) -> DashboardSnapshot:
    """`now` must be in the store's timezone: "today" starts at its local midnight."""
    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_ago = now - timedelta(days=7)

    today = [o for o in orders if o.created_at >= today_start]
    week = [o for o in orders if o.created_at >= week_ago]

    per_email = Counter(o.customer.email for o in orders if o.customer and o.customer.email)

    low_stock = sorted(
        (
            LowStockProduct(product=p, total_stock=p.total_stock)
            for p in products
            if 0 < p.total_stock <= LOW_STOCK_MAX
        ),
        key=lambda row: row.total_stock,
    )[:LOW_STOCK_ROWS]

    return DashboardSnapshot(
        today_orders=len(today),
        today_revenue=sum((o.total_price for o in today), Decimal("0")),
        pending_orders=sum(1 for o in orders if o.is_pending),
        weekly_revenue=sum((o.total_price for o in week), Decimal("0")),
        total_products=len(products),
        active_products=sum(1 for p in products if p.in_stock),
        total_customers=len(customers),
        recurring_customers=sum(1 for n in per_email.values() if n >= RECURRING_MIN_ORDERS),
        recent_orders=sorted(orders, key=lambda o: o.created_at, reverse=True)[:RECENT_ORDERS],
        low_stock=low_stock,
    )
