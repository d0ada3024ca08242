# src/op_orders/application/schemas.py
"""Pydantic schemas for op_orders requests and responses.

Amounts are serialised as strings (Shopify's own decimal-as-string form)
so no precision is lost on the way to the browser.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from src.op_common.datetime_utils import format_display_date
from src.op_orders.domain.dashboard import DashboardSnapshot
from src.op_orders.domain.dispatch import DispatchSchedule
from src.op_orders.domain.view_model import OrderCounts, OrderListView, OrderRow
from src.op_overrides.application.schemas import AddressOut
from src.op_shopify.domain.models import (
    Customer,
    FulfillmentOrder,
    LineItem,
    Product,
    ShippingAddress,
    Shop,
    TrackingInfo,
)

# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


class DispatchOut(BaseModel):
    dispatch_date: date
    display: str
    is_special_order: bool

    @classmethod
    def from_domain(cls, s: DispatchSchedule) -> "DispatchOut":
        return cls(
            dispatch_date=s.dispatch_date,
            display=format_display_date(s.dispatch_date),
            is_special_order=s.is_special_order,
        )


class CustomerOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str | None
    phone: str | None
    orders_count: int

    @classmethod
    def from_domain(cls, c: Customer) -> "CustomerOut":
        return cls(
            id=c.id,
            first_name=c.first_name,
            last_name=c.last_name,
            email=c.email,
            phone=c.phone,
            orders_count=c.orders_count,
        )


class ShippingAddressOut(BaseModel):
    first_name: str
    last_name: str
    address1: str
    address2: str | None
    city: str
    province: str
    country: str
    zip: str
    phone: str | None
    company: str | None

    @classmethod
    def from_domain(cls, a: ShippingAddress) -> "ShippingAddressOut":
        return cls(
            first_name=a.first_name,
            last_name=a.last_name,
            address1=a.address1,
            address2=a.address2,
            city=a.city,
            province=a.province,
            country=a.country,
            zip=a.zip,
            phone=a.phone,
            company=a.company,
        )


class LineItemOut(BaseModel):
    id: int | None
    title: str
    variant_title: str | None
    quantity: int
    price: str
    sku: str | None

    @classmethod
    def from_domain(cls, li: LineItem) -> "LineItemOut":
        return cls(
            id=li.id,
            title=li.title,
            variant_title=li.variant_title,
            quantity=li.quantity,
            price=str(li.price),
            sku=li.sku,
        )


class OrderSummaryOut(BaseModel):
    id: int
    order_number: int
    name: str
    created_at: datetime
    total_price: str
    currency: str
    financial_status: str | None
    fulfillment_status: str | None
    customer: CustomerOut | None
    shipping_address: ShippingAddressOut | None
    line_items: list[LineItemOut]
    tags: str
    dispatch: DispatchOut
    address_edited: bool

    @classmethod
    def from_row(cls, row: OrderRow) -> "OrderSummaryOut":
        o = row.order
        return cls(
            id=o.id,
            order_number=o.order_number,
            name=o.name,
            created_at=o.created_at,
            total_price=str(o.total_price),
            currency=o.currency,
            financial_status=o.financial_status.value if o.financial_status else None,
            fulfillment_status=o.fulfillment_status.value if o.fulfillment_status else None,
            customer=CustomerOut.from_domain(o.customer) if o.customer else None,
            shipping_address=(
                ShippingAddressOut.from_domain(o.shipping_address) if o.shipping_address else None
            ),
            line_items=[LineItemOut.from_domain(li) for li in o.line_items],
            tags=o.tags,
            dispatch=DispatchOut.from_domain(row.schedule),
            address_edited=row.edited,
        )


class CountsOut(BaseModel):
    total: int
    pending: int
    fulfilled: int

    @classmethod
    def from_domain(cls, c: OrderCounts) -> "CountsOut":
        return cls(total=c.total, pending=c.pending, fulfilled=c.fulfilled)


class OrderListResponse(BaseModel):
    items: list[OrderSummaryOut]
    counts: CountsOut
    filtered_ids: list[int]
    selected: list[int]  # bulk selection, scoped to filtered_ids, in row order
    is_filtered: bool

    @classmethod
    def from_view(cls, view: OrderListView) -> "OrderListResponse":
        return cls(
            items=[OrderSummaryOut.from_row(r) for r in view.rows],
            counts=CountsOut.from_domain(view.counts),
            filtered_ids=view.filtered_ids,
            selected=[i for i in view.filtered_ids if i in view.state.selected],
            is_filtered=view.state.is_filtered,
        )


class FulfillmentOut(BaseModel):
    id: int
    status: str
    tracking_number: str | None
    tracking_url: str | None
    tracking_company: str | None


class OrderDetailResponse(OrderSummaryOut):
    email: str | None
    subtotal_price: str | None
    total_tax: str | None
    total_discounts: str | None
    total_shipping_price: str | None
    note: str | None
    fulfillments: list[FulfillmentOut]
    resolved_address: AddressOut | None

    @classmethod
    def from_order(
        cls,
        row: OrderRow,
        resolved: AddressOut | None,
    ) -> "OrderDetailResponse":
        o = row.order
        base = OrderSummaryOut.from_row(row).model_dump()
        return cls(
            **base,
            email=o.email,
            subtotal_price=_opt_str(o.subtotal_price),
            total_tax=_opt_str(o.total_tax),
            total_discounts=_opt_str(o.total_discounts),
            total_shipping_price=_opt_str(o.total_shipping_price),
            note=o.note,
            fulfillments=[
                FulfillmentOut(
                    id=f.id,
                    status=f.status,
                    tracking_number=f.tracking_number,
                    tracking_url=f.tracking_url,
                    tracking_company=f.tracking_company,
                )
                for f in o.fulfillments
            ],
            resolved_address=resolved,
        )


def _opt_str(value) -> str | None:
    return None if value is None else str(value)


class FulfillmentOrderOut(BaseModel):
    id: int
    status: str

    @classmethod
    def from_domain(cls, fo: FulfillmentOrder) -> "FulfillmentOrderOut":
        return cls(id=fo.id, status=fo.status)


# ---------------------------------------------------------------------------
# Fulfillment
# ---------------------------------------------------------------------------


class FulfillRequest(BaseModel):
    tracking_number: str | None = None
    tracking_company: str | None = None
    tracking_url: str | None = None
    notify_customer: bool = True

    def to_domain(self) -> TrackingInfo:
        return TrackingInfo(
            number=self.tracking_number or None,
            company=self.tracking_company or None,
            url=self.tracking_url or None,
            notify=self.notify_customer,
        )


class BulkFulfillItem(FulfillRequest):
    order_id: int


class BulkFulfillRequest(BaseModel):
    items: list[BulkFulfillItem] = Field(min_length=1)

    @field_validator("items")
    @classmethod
    def order_ids_unique(cls, v: list[BulkFulfillItem]) -> list[BulkFulfillItem]:
        seen: set[int] = set()
        for item in v:
            if item.order_id in seen:
                raise ValueError(f"order {item.order_id} appears more than once")
            seen.add(item.order_id)
        return v


class BulkFulfillResponse(BaseModel):
    ok: bool
    attempted: int
    failed: int
    errors: list[str]


# ---------------------------------------------------------------------------
# Products / customers / shop
# ---------------------------------------------------------------------------


class VariantOut(BaseModel):
    id: int
    title: str
    price: str
    sku: str | None
    inventory_quantity: int


class ProductOut(BaseModel):
    id: int
    title: str
    vendor: str
    product_type: str
    tags: str
    status: str
    image: str | None
    total_stock: int
    variants: list[VariantOut]

    @classmethod
    def from_domain(cls, p: Product) -> "ProductOut":
        return cls(
            id=p.id,
            title=p.title,
            vendor=p.vendor,
            product_type=p.product_type,
            tags=p.tags,
            status=p.status,
            image=p.image,
            total_stock=p.total_stock,
            variants=[
                VariantOut(
                    id=v.id,
                    title=v.title,
                    price=str(v.price),
                    sku=v.sku,
                    inventory_quantity=v.inventory_quantity,
                )
                for v in p.variants
            ],
        )


class CustomerListItem(BaseModel):
    id: int
    name: str
    email: str | None
    phone: str | None
    orders_count: int
    total_spent: str
    created_at: datetime | None

    @classmethod
    def from_domain(cls, c: Customer) -> "CustomerListItem":
        return cls(
            id=c.id,
            name=c.full_name,
            email=c.email,
            phone=c.phone,
            orders_count=c.orders_count,
            total_spent=str(c.total_spent),
            created_at=c.created_at,
        )


class ShopOut(BaseModel):
    name: str
    email: str | None
    domain: str
    currency: str
    timezone: str | None

    @classmethod
    def from_domain(cls, s: Shop) -> "ShopOut":
        return cls(
            name=s.name,
            email=s.email,
            domain=s.domain,
            currency=s.currency,
            timezone=s.timezone,
        )


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class RecentOrderOut(BaseModel):
    id: int
    name: str
    customer: str
    created_at: datetime
    total_price: str
    fulfillment_status: str | None


class LowStockOut(BaseModel):
    id: int
    title: str
    total_stock: int


class DashboardResponse(BaseModel):
    today_orders: int
    today_revenue: str
    pending_orders: int
    weekly_revenue: str
    total_products: int
    active_products: int
    total_customers: int
    recurring_customers: int
    recent_orders: list[RecentOrderOut]
    low_stock: list[LowStockOut]

    @classmethod
    def from_domain(cls, d: DashboardSnapshot) -> "DashboardResponse":
        return cls(
            today_orders=d.today_orders,
            today_revenue=str(d.today_revenue),
            pending_orders=d.pending_orders,
            weekly_revenue=str(d.weekly_revenue),
            total_products=d.total_products,
            active_products=d.active_products,
            total_customers=d.total_customers,
            recurring_customers=d.recurring_customers,
            recent_orders=[
                RecentOrderOut(
                    id=o.id,
                    name=o.name,
                    customer=o.customer.full_name if o.customer else "",
                    created_at=o.created_at,
                    total_price=str(o.total_price),
                    fulfillment_status=o.fulfillment_status.value if o.fulfillment_status else None,
                )
                for o in d.recent_orders
            ],
            low_stock=[
                LowStockOut(id=row.product.id, title=row.product.title, total_stock=row.total_stock)
                for row in d.low_stock
            ],
        )
