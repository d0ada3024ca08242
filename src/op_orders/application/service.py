"""OrderApplicationService — order list/detail projections and fulfillment.

The service composes three collaborators and owns no state of its own:
  - OrderDataSourceProtocol   (Shopify, source of record)
  - AddressOverrideStore      (local address corrections)
  - the pure view-model / dispatch functions in op_orders.domain
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from src.op_common.datetime_utils import utc_now
from src.op_common.errors import AppError, OrderNotFoundError, UpstreamNotFoundError
from src.op_orders.application.schemas import (
    BulkFulfillItem,
    FulfillmentOrderOut,
    FulfillRequest,
    OrderDetailResponse,
    OrderListResponse,
)
from src.op_orders.domain.bulk import BulkFulfillResult
from src.op_orders.domain.dispatch import compute_dispatch_schedule
from src.op_orders.domain.view_model import OrderListState, OrderRow, build_order_list
from src.op_overrides.application.schemas import AddressOut
from src.op_overrides.application.store import AddressOverrideStore
from src.op_overrides.domain.address import canonicalize
from src.op_shopify.domain.models import Order
from src.op_shopify.domain.source import OrderDataSourceProtocol

logger = logging.getLogger(__name__)


class OrderApplicationService:
    def __init__(
        self,
        source: OrderDataSourceProtocol,
        store: AddressOverrideStore,
        fetch_limit: int = 250,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._source = source
        self._store = store
        self._fetch_limit = fetch_limit
        self._clock = clock

    async def _get_order(self, order_id: int) -> Order:
        try:
            return await self._source.get_order(order_id)
        except UpstreamNotFoundError as exc:
            raise OrderNotFoundError(order_id) from exc

    async def list_orders(
        self,
        state: OrderListState,
        status: str = "any",
        select_all: bool = False,
    ) -> OrderListResponse:
        """Project the list for `state`.

        The selection in the result is always scoped to the filtered rows.
        With select_all, it toggles between none and every filtered row.
        """
        orders = await self._source.list_orders(status=status, limit=self._fetch_limit)
        overrides = await self._store.snapshot(o.id for o in orders)
        edited_ids = [o.id for o in orders if overrides.has(o.id)]
        now = self._clock()
        view = build_order_list(orders, state, now, edited_ids=edited_ids)
        if select_all:
            toggled = view.state.select_all(view.filtered_ids)
            view = build_order_list(orders, toggled, now, edited_ids=edited_ids)
        return OrderListResponse.from_view(view)

    async def get_order(self, order_id: int) -> OrderDetailResponse:
        order = await self._get_order(order_id)
        override = await self._store.get(order.id)
        canonical = canonicalize(order.shipping_address, order.customer)
        resolved = override.address if override is not None else canonical
        row = OrderRow(
            order=order,
            schedule=compute_dispatch_schedule(order.created_at, order.line_items),
            edited=override is not None,
        )
        return OrderDetailResponse.from_order(
            row, AddressOut.from_domain(resolved) if resolved is not None else None
        )

    async def list_fulfillment_orders(self, order_id: int) -> list[FulfillmentOrderOut]:
        try:
            fulfillment_orders = await self._source.list_fulfillment_orders(order_id)
        except UpstreamNotFoundError as exc:
            raise OrderNotFoundError(order_id) from exc
        return [FulfillmentOrderOut.from_domain(fo) for fo in fulfillment_orders]

    async def fulfill_order(self, order_id: int, req: FulfillRequest) -> dict:
        try:
            return await self._source.mark_fulfilled(order_id, req.to_domain())
        except UpstreamNotFoundError as exc:
            raise OrderNotFoundError(order_id) from exc

    async def bulk_fulfill(self, items: list[BulkFulfillItem]) -> BulkFulfillResult:
        """Fan out one fulfillment per order, wait for every one to settle.

        No cancellation mid-batch and no retry: a failure in one request
        never stops the others, and never rolls them back.
        """
        results = await asyncio.gather(
            *(self._source.mark_fulfilled(item.order_id, item.to_domain()) for item in items),
            return_exceptions=True,
        )
        errors: list[str] = []
        for item, result in zip(items, results):
            if isinstance(result, AppError):
                errors.append(result.message)
            elif isinstance(result, BaseException):
                logger.error("Fulfillment of order %s crashed", item.order_id, exc_info=result)
                errors.append(str(result) or type(result).__name__)

        outcome = BulkFulfillResult(attempted=len(items), errors=errors)
        if outcome.ok:
            logger.info("Bulk fulfillment: %d orders fulfilled", outcome.attempted)
        else:
            logger.warning(
                "Bulk fulfillment: %d of %d requests failed", outcome.failed, outcome.attempted
            )
        return outcome
