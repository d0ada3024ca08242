"""Shopify Admin REST payload → domain model mapping.

Shopify field names are snake_case JSON; unknown enum values and missing
optional blocks map to None rather than failing the whole order.
"""

import logging
from typing import Any

from src.op_common.datetime_utils import parse_timestamp
from src.op_common.enums import FinancialStatus, FulfillmentStatus
from src.op_common.money import parse_amount
from src.op_shopify.domain.models import (
    Customer,
    Fulfillment,
    FulfillmentOrder,
    LineItem,
    NoteAttribute,
    Order,
    Product,
    ProductVariant,
    ShippingAddress,
    Shop,
)

logger = logging.getLogger(__name__)


def _enum_or_none(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def to_shipping_address(data: dict[str, Any] | None) -> ShippingAddress | None:
    if not data:
        return None
    return ShippingAddress(
        first_name=data.get("first_name") or "",
        last_name=data.get("last_name") or "",
        address1=data.get("address1") or "",
        address2=data.get("address2"),
        city=data.get("city") or "",
        province=data.get("province") or "",
        country=data.get("country") or "",
        zip=data.get("zip") or "",
        phone=data.get("phone"),
        company=data.get("company"),
    )


def to_customer(data: dict[str, Any] | None) -> Customer | None:
    if not data:
        return None
    created = data.get("created_at")
    return Customer(
        id=data["id"],
        email=data.get("email"),
        first_name=data.get("first_name") or "",
        last_name=data.get("last_name") or "",
        phone=data.get("phone"),
        orders_count=data.get("orders_count") or 0,
        total_spent=parse_amount(data.get("total_spent")),
        created_at=parse_timestamp(created) if created else None,
    )


def to_line_items(items: list[dict[str, Any]]) -> list[LineItem]:
    result: list[LineItem] = []
    for item in items:
        quantity = int(item.get("quantity") or 0)
        if quantity < 1:
            # fully removed/refunded lines come back with quantity 0
            logger.debug("Skipping line item %s with quantity %d", item.get("id"), quantity)
            continue
        result.append(
            LineItem(
                id=item.get("id"),
                title=item.get("title") or item.get("name") or "",
                variant_title=item.get("variant_title"),
                quantity=quantity,
                price=parse_amount(item.get("price")),
                sku=item.get("sku"),
            )
        )
    return result


def to_order(data: dict[str, Any]) -> Order:
    shipping_set = (data.get("total_shipping_price_set") or {}).get("shop_money") or {}
    return Order(
        id=data["id"],
        order_number=data.get("order_number") or 0,
        name=data.get("name") or "",
        email=data.get("email"),
        created_at=parse_timestamp(data["created_at"]),
        total_price=parse_amount(data.get("total_price")),
        currency=data.get("currency") or "CLP",
        financial_status=_enum_or_none(FinancialStatus, data.get("financial_status")),
        fulfillment_status=_enum_or_none(FulfillmentStatus, data.get("fulfillment_status")),
        customer=to_customer(data.get("customer")),
        shipping_address=to_shipping_address(data.get("shipping_address")),
        line_items=to_line_items(data.get("line_items") or []),
        subtotal_price=parse_amount(data["subtotal_price"]) if "subtotal_price" in data else None,
        total_tax=parse_amount(data["total_tax"]) if "total_tax" in data else None,
        total_discounts=parse_amount(data["total_discounts"]) if "total_discounts" in data else None,
        total_shipping_price=parse_amount(shipping_set.get("amount")) if shipping_set else None,
        note=data.get("note"),
        note_attributes=[
            NoteAttribute(name=str(a.get("name", "")), value=str(a.get("value", "")))
            for a in data.get("note_attributes") or []
        ],
        fulfillments=[
            Fulfillment(
                id=f["id"],
                status=f.get("status") or "",
                tracking_number=f.get("tracking_number"),
                tracking_url=f.get("tracking_url"),
                tracking_company=f.get("tracking_company"),
            )
            for f in data.get("fulfillments") or []
        ],
        tags=data.get("tags") or "",
    )


def to_fulfillment_order(data: dict[str, Any]) -> FulfillmentOrder:
    return FulfillmentOrder(id=data["id"], status=data.get("status") or "", raw=data)


def to_product(data: dict[str, Any]) -> Product:
    images = data.get("images") or []
    return Product(
        id=data["id"],
        title=data.get("title") or "",
        vendor=data.get("vendor") or "",
        product_type=data.get("product_type") or "",
        tags=data.get("tags") or "",
        status=data.get("status") or "active",
        variants=[
            ProductVariant(
                id=v["id"],
                title=v.get("title") or "",
                price=parse_amount(v.get("price")),
                sku=v.get("sku"),
                inventory_quantity=v.get("inventory_quantity") or 0,
            )
            for v in data.get("variants") or []
        ],
        image=images[0].get("src") if images else None,
    )


def to_shop(data: dict[str, Any]) -> Shop:
    return Shop(
        name=data.get("name") or "",
        email=data.get("email"),
        domain=data.get("domain") or "",
        currency=data.get("currency") or "",
        timezone=data.get("timezone"),
    )
