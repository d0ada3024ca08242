"""Order list view-model — immutable UI state and pure projections.

OrderListState is never mutated: every transition returns a new state.
build_order_list() turns (orders, state, now) into exactly what a list or
table renders, plus badge counts over the *unfiltered* set.

Filters are AND-combined and all applied:
  1. fulfillment status (pending = null or "unfulfilled")
  2. date range: created_at >= now - days (boundary inclusive)
  3. free-text search over name, order number, customer first/last name, email

Sorting is stable. Equal keys keep input order; there is no secondary key.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

from src.op_common.enums import FulfillmentFilter, SortDirection, SortKey
from src.op_orders.domain.dispatch import DispatchSchedule, compute_dispatch_schedule
from src.op_shopify.domain.models import Order


@dataclass(frozen=True)
class OrderListState:
    search: str = ""
    fulfillment_filter: FulfillmentFilter = FulfillmentFilter.ALL
    days: int | None = None
    sort_by: SortKey = SortKey.PURCHASE
    direction: SortDirection = SortDirection.DESC
    selected: frozenset[int] = field(default_factory=frozenset)

    @property
    def is_filtered(self) -> bool:
        return bool(self.search.strip()) or self.fulfillment_filter != FulfillmentFilter.ALL or self.days is not None

    def with_search(self, text: str) -> "OrderListState":
        return replace(self, search=text)

    def with_fulfillment_filter(self, value: FulfillmentFilter) -> "OrderListState":
        return replace(self, fulfillment_filter=value)

    def with_days(self, days: int | None) -> "OrderListState":
        return replace(self, days=days)

    def toggle_sort(self, key: SortKey) -> "OrderListState":
        """Clicking the active column flips direction; a new column keeps it."""
        if key == self.sort_by:
            flipped = SortDirection.ASC if self.direction == SortDirection.DESC else SortDirection.DESC
            return replace(self, direction=flipped)
        return replace(self, sort_by=key)

    def toggle_selected(self, order_id: int) -> "OrderListState":
        if order_id in self.selected:
            return replace(self, selected=self.selected - {order_id})
        return replace(self, selected=self.selected | {order_id})

    def select_all(self, filtered_ids: Iterable[int]) -> "OrderListState":
        """Toggle between "nothing" and "every currently filtered row"."""
        ids = frozenset(filtered_ids)
        if ids and self.selected == ids:
            return replace(self, selected=frozenset())
        return replace(self, selected=ids)

    def prune_selection(self, filtered_ids: Iterable[int]) -> "OrderListState":
        return replace(self, selected=self.selected & frozenset(filtered_ids))


@dataclass(frozen=True)
class OrderCounts:
    total: int
    pending: int
    fulfilled: int


@dataclass(frozen=True)
class OrderRow:
    order: Order
    schedule: DispatchSchedule
    edited: bool = False


@dataclass(frozen=True)
class OrderListView:
    rows: list[OrderRow]
    counts: OrderCounts
    state: OrderListState

    @property
    def filtered_ids(self) -> list[int]:
        return [row.order.id for row in self.rows]


def count_orders(orders: Sequence[Order]) -> OrderCounts:
    return OrderCounts(
        total=len(orders),
        pending=sum(1 for o in orders if o.is_pending),
        fulfilled=sum(1 for o in orders if o.is_fulfilled),
    )


def matches_search(order: Order, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    customer = order.customer
    fields = [
        order.name,
        str(order.order_number),
        customer.first_name if customer else None,
        customer.last_name if customer else None,
        customer.email if customer else None,
    ]
    return any(needle in value.lower() for value in fields if value)


def matches_status(order: Order, value: FulfillmentFilter) -> bool:
    if value == FulfillmentFilter.PENDING:
        return order.is_pending
    if value == FulfillmentFilter.FULFILLED:
        return order.is_fulfilled
    return True


def filter_orders(orders: Sequence[Order], state: OrderListState, now: datetime) -> list[Order]:
    cutoff = now - timedelta(days=state.days) if state.days is not None else None
    return [
        o
        for o in orders
        if matches_status(o, state.fulfillment_filter)
        and (cutoff is None or o.created_at >= cutoff)
        and matches_search(o, state.search)
    ]


def sort_rows(rows: Sequence[OrderRow], state: OrderListState) -> list[OrderRow]:
    reverse = state.direction == SortDirection.DESC
    if state.sort_by == SortKey.DISPATCH:
        return sorted(rows, key=lambda r: r.schedule.dispatch_date, reverse=reverse)
    return sorted(rows, key=lambda r: r.order.created_at, reverse=reverse)


def build_order_list(
    orders: Sequence[Order],
    state: OrderListState,
    now: datetime,
    edited_ids: Iterable[int] = (),
) -> OrderListView:
    edited = frozenset(edited_ids)
    filtered = filter_orders(orders, state, now)
    rows = [
        OrderRow(
            order=o,
            schedule=compute_dispatch_schedule(o.created_at, o.line_items),
            edited=o.id in edited,
        )
        for o in filtered
    ]
    rows = sort_rows(rows, state)
    effective = state.prune_selection(r.order.id for r in rows)
    return OrderListView(rows=rows, counts=count_orders(orders), state=effective)
