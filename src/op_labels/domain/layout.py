"""Label layout — partition orders into fixed-capacity pages.

Pages are consecutive chunks of the input in input order: no reordering,
no bin-packing, no placeholder padding. The last page may be short; its
empty grid cells are simply left blank by the renderer.

Address resolution is override-aware: an override's edited address wins,
otherwise the canonical Shopify address (with the customer's name when the
address has none). The `edited` flag is informational only and never
affects layout.
"""

import math
from collections.abc import Sequence
from typing import TypeVar

from src.op_common.money import format_clp, format_rut
from src.op_labels.domain.models import COMPACT_GRID, LabelDescriptor, LabelPage
from src.op_overrides.application.store import OverrideSnapshot
from src.op_overrides.domain.address import canonicalize
from src.op_overrides.domain.models import EditedAddress
from src.op_shopify.domain.models import Order

T = TypeVar("T")

ITEMS_ON_LABEL = 3
RUT_ATTRIBUTE_NAMES = frozenset({"rut", "RUT", "run", "RUN", "tax_id", "Tax ID"})


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    if size < 1:
        raise ValueError(f"page capacity must be >= 1, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def page_count(total: int, capacity: int = COMPACT_GRID.capacity) -> int:
    return math.ceil(total / capacity)


def resolve_label_address(order: Order, overrides: OverrideSnapshot) -> EditedAddress | None:
    return overrides.resolve(order.id, canonicalize(order.shipping_address, order.customer))


def find_rut(order: Order) -> str | None:
    for attr in order.note_attributes:
        if attr.name in RUT_ATTRIBUTE_NAMES and attr.value:
            return attr.value
    if order.shipping_address is not None and order.shipping_address.company:
        return order.shipping_address.company
    return None


def build_label(order: Order, overrides: OverrideSnapshot) -> LabelDescriptor:
    rut = find_rut(order)
    return LabelDescriptor(
        order_id=order.id,
        order_name=order.name,
        address=resolve_label_address(order, overrides),
        items=[f"{li.quantity}x {li.title}" for li in order.line_items[:ITEMS_ON_LABEL]],
        extra_items=max(0, len(order.line_items) - ITEMS_ON_LABEL),
        item_count=len(order.line_items),
        total=format_clp(order.total_price),
        email=order.contact_email,
        rut=format_rut(rut) if rut else None,
        edited=overrides.has(order.id),
    )


def layout_labels(
    orders: Sequence[Order],
    overrides: OverrideSnapshot | None = None,
    page_capacity: int = COMPACT_GRID.capacity,
) -> list[LabelPage]:
    snapshot = overrides if overrides is not None else OverrideSnapshot()
    return [
        LabelPage(index=i, labels=[build_label(o, snapshot) for o in page])
        for i, page in enumerate(chunk(orders, page_capacity))
    ]


def select_orders_for_labels(
    orders: Sequence[Order],
    refs: Sequence[str],
    preview_limit: int = 10,
) -> list[Order]:
    """Orders named by refs (id, order number or name without '#'), in fetch order.

    With no refs, a preview of the first unfulfilled orders.
    """
    wanted = {r.strip().lstrip("#") for r in refs if r.strip()}
    if not wanted:
        return [o for o in orders if o.is_pending][:preview_limit]
    return [
        o
        for o in orders
        if str(o.id) in wanted
        or str(o.order_number) in wanted
        or o.name.replace("#", "") in wanted
    ]
