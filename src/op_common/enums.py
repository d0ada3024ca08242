"""Global enums — values match the Shopify Admin API / query parameters exactly."""

from enum import Enum


class FinancialStatus(str, Enum):
    PENDING = "pending"
    AUTHORIZED = "authorized"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    PARTIALLY_REFUNDED = "partially_refunded"
    REFUNDED = "refunded"
    VOIDED = "voided"


class FulfillmentStatus(str, Enum):
    """Shopify also sends null, which is modelled as None (treated as pending)."""
    FULFILLED = "fulfilled"
    PARTIAL = "partial"
    UNFULFILLED = "unfulfilled"


class FulfillmentFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    FULFILLED = "fulfilled"


class SortKey(str, Enum):
    PURCHASE = "purchase"
    DISPATCH = "dispatch"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class PaperSize(str, Enum):
    CARTA = "carta"
    OFICIO = "oficio"
    A4 = "a4"
