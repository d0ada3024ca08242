# tests/unit/test_shopify_mapper.py
"""Unit tests for Shopify payload → domain mapping."""
from datetime import timedelta
from decimal import Decimal

from src.op_common.enums import FinancialStatus, FulfillmentStatus
from src.op_shopify.infrastructure import mapper


def _order_payload(**kwargs) -> dict:
    data = {
        "id": 1,
        "order_number": 1001,
        "name": "#1001",
        "email": "ana@example.com",
        "created_at": "2026-01-05T10:00:00-03:00",
        "total_price": "15990.00",
        "subtotal_price": "13437.00",
        "financial_status": "paid",
        "fulfillment_status": None,
        "customer": {"id": 9, "first_name": "Ana", "last_name": "Pérez", "orders_count": 3,
                     "total_spent": "50000.00"},
        "shipping_address": {"first_name": "Ana", "address1": "Av. Italia 10", "company": "12345678-5"},
        "line_items": [
            {"id": 1, "title": "Polera", "quantity": 2, "price": "7995.00"},
            {"id": 2, "title": "Devuelto", "quantity": 0, "price": "1000.00"},
        ],
        "note_attributes": [{"name": "RUT", "value": "12345678-5"}],
        "total_shipping_price_set": {"shop_money": {"amount": "2553.00"}},
    }
    data.update(kwargs)
    return data


class TestToOrder:
    def test_basic_fields(self) -> None:
        order = mapper.to_order(_order_payload())
        assert order.total_price == Decimal("15990.00")
        assert order.financial_status == FinancialStatus.PAID
        assert order.fulfillment_status is None
        assert order.is_pending
        assert order.created_at.utcoffset() == timedelta(hours=-3)
        assert order.customer.full_name == "Ana Pérez"
        assert order.shipping_address.company == "12345678-5"
        assert order.total_shipping_price == Decimal("2553.00")
        assert order.note_attributes[0].name == "RUT"

    def test_zero_quantity_lines_dropped(self) -> None:
        order = mapper.to_order(_order_payload())
        assert [li.title for li in order.line_items] == ["Polera"]

    def test_unknown_status_maps_to_none(self) -> None:
        order = mapper.to_order(_order_payload(fulfillment_status="restocked"))
        assert order.fulfillment_status is None

    def test_fulfilled(self) -> None:
        order = mapper.to_order(_order_payload(fulfillment_status="fulfilled"))
        assert order.fulfillment_status == FulfillmentStatus.FULFILLED

    def test_missing_optional_blocks(self) -> None:
        order = mapper.to_order(_order_payload(customer=None, shipping_address=None,
                                               line_items=None, total_shipping_price_set=None))
        assert order.customer is None
        assert order.shipping_address is None
        assert order.line_items == []
        assert order.total_shipping_price is None

    def test_line_item_name_fallback(self) -> None:
        order = mapper.to_order(_order_payload(line_items=[{"name": "Mesa PEDIDO", "quantity": 1}]))
        assert order.line_items[0].title == "Mesa PEDIDO"
        assert order.line_items[0].price == Decimal("0")


class TestToProduct:
    def test_stock_and_image(self) -> None:
        product = mapper.to_product({
            "id": 5, "title": "Polera",
            "variants": [{"id": 1, "title": "S", "price": "7995", "inventory_quantity": 2},
                         {"id": 2, "title": "M", "price": "7995", "inventory_quantity": None}],
            "images": [{"src": "https://cdn.example.com/p.jpg"}],
        })
        assert product.total_stock == 2
        assert product.in_stock
        assert product.image == "https://cdn.example.com/p.jpg"
