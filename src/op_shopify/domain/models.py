"""Domain models for Shopify records — pure dataclasses, no HTTP or pydantic dependency.

These are read-only from the application's point of view: nothing here is
ever written back to Shopify except through OrderDataSource.mark_fulfilled.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from src.op_common.enums import FinancialStatus, FulfillmentStatus


@dataclass
class ShippingAddress:
    first_name: str = ""
    last_name: str = ""
    address1: str = ""
    address2: str | None = None
    city: str = ""
    province: str = ""
    country: str = ""
    zip: str = ""
    phone: str | None = None
    company: str | None = None


@dataclass
class Customer:
    id: int
    email: str | None = None
    first_name: str = ""
    last_name: str = ""
    phone: str | None = None
    orders_count: int = 0
    total_spent: Decimal = Decimal("0")
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class LineItem:
    title: str
    quantity: int
    price: Decimal
    id: int | None = None
    variant_title: str | None = None
    sku: str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"LineItem quantity must be >= 1, got {self.quantity}")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Fulfillment:
    id: int
    status: str
    tracking_number: str | None = None
    tracking_url: str | None = None
    tracking_company: str | None = None


@dataclass
class NoteAttribute:
    name: str
    value: str


@dataclass
class Order:
    id: int
    order_number: int
    name: str  # "#1001"
    created_at: datetime
    total_price: Decimal
    currency: str = "CLP"
    email: str | None = None
    financial_status: FinancialStatus | None = None
    fulfillment_status: FulfillmentStatus | None = None  # None == Shopify null
    customer: Customer | None = None
    shipping_address: ShippingAddress | None = None
    line_items: list[LineItem] = field(default_factory=list)
    # Detail-only fields
    subtotal_price: Decimal | None = None
    total_tax: Decimal | None = None
    total_discounts: Decimal | None = None
    total_shipping_price: Decimal | None = None
    note: str | None = None
    note_attributes: list[NoteAttribute] = field(default_factory=list)
    fulfillments: list[Fulfillment] = field(default_factory=list)
    tags: str = ""

    @property
    def is_pending(self) -> bool:
        return self.fulfillment_status in (None, FulfillmentStatus.UNFULFILLED)

    @property
    def is_fulfilled(self) -> bool:
        return self.fulfillment_status == FulfillmentStatus.FULFILLED

    @property
    def contact_email(self) -> str | None:
        if self.email:
            return self.email
        return self.customer.email if self.customer else None


@dataclass
class TrackingInfo:
    number: str | None = None
    company: str | None = None
    url: str | None = None
    notify: bool = True


@dataclass
class FulfillmentOrder:
    id: int
    status: str
    raw: dict = field(default_factory=dict)


@dataclass
class ProductVariant:
    id: int
    title: str
    price: Decimal
    sku: str | None = None
    inventory_quantity: int = 0


@dataclass
class Product:
    id: int
    title: str
    vendor: str = ""
    product_type: str = ""
    tags: str = ""
    status: str = "active"
    variants: list[ProductVariant] = field(default_factory=list)
    image: str | None = None

    @property
    def total_stock(self) -> int:
        return sum(v.inventory_quantity or 0 for v in self.variants)

    @property
    def in_stock(self) -> bool:
        return any((v.inventory_quantity or 0) > 0 for v in self.variants)


@dataclass
class Shop:
    name: str
    email: str | None
    domain: str
    currency: str
    timezone: str | None = None
