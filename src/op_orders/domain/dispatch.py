"""Dispatch-date rules — pure functions, no I/O.

Rule:
  - any line item whose title contains "PEDIDO" (case-insensitive)
    makes the whole order a special order → 20 business days
  - otherwise (including an order with no items) → 3 business days

Business day = Monday..Friday. No holiday calendar. The order date itself
is never counted: "N business days after the order".

Precondition: created_at is an already-parsed datetime (parsing failures
are rejected upstream in the Shopify mapper).
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from src.op_shopify.domain.models import LineItem

SPECIAL_ORDER_MARKER = "PEDIDO"
SPECIAL_ORDER_BUSINESS_DAYS = 20
STOCK_ORDER_BUSINESS_DAYS = 3

_SATURDAY = 5


@dataclass(frozen=True)
class DispatchSchedule:
    dispatch_date: date
    is_special_order: bool


def add_business_days(start: date, days: int) -> date:
    """Walk forward one calendar day at a time, counting only weekdays."""
    result = start
    count = 0
    while count < days:
        result += timedelta(days=1)
        if result.weekday() < _SATURDAY:
            count += 1
    return result


def _title_of(item: LineItem | Mapping[str, Any]) -> str:
    if isinstance(item, LineItem):
        return item.title or ""
    return item.get("title") or item.get("name") or ""


def is_special_order(line_items: Iterable[LineItem | Mapping[str, Any]]) -> bool:
    return any(SPECIAL_ORDER_MARKER in _title_of(item).upper() for item in line_items)


def compute_dispatch_schedule(
    created_at: datetime | date,
    line_items: Iterable[LineItem | Mapping[str, Any]],
) -> DispatchSchedule:
    special = is_special_order(line_items)
    # Calendar day as the store sees it (the order's own UTC offset)
    start = created_at.date() if isinstance(created_at, datetime) else created_at
    days = SPECIAL_ORDER_BUSINESS_DAYS if special else STOCK_ORDER_BUSINESS_DAYS
    return DispatchSchedule(dispatch_date=add_business_days(start, days), is_special_order=special)


def compute_dispatch_date(
    created_at: datetime | date,
    line_items: Iterable[LineItem | Mapping[str, Any]],
) -> date:
    return compute_dispatch_schedule(created_at, line_items).dispatch_date
