# src/op_orders/api/router.py
"""op_orders REST endpoints.

GET  /orders                                — filtered, sorted list + badge counts + scoped selection
POST /orders/bulk-fulfill                   — concurrent fulfillment of a selection
GET  /orders/{order_id}                     — detail with dispatch date and resolved address
GET  /orders/{order_id}/fulfillment-orders  — Shopify fulfillment orders
POST /orders/{order_id}/fulfill             — mark one order as shipped
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from config.settings import settings
from src.op_common.enums import FulfillmentFilter, SortDirection, SortKey
from src.op_common.errors import BulkFulfillFailedError
from src.op_common.response import ApiResponse, respond
from src.op_orders.application.schemas import (
    BulkFulfillRequest,
    BulkFulfillResponse,
    FulfillRequest,
)
from src.op_orders.application.service import OrderApplicationService
from src.op_orders.domain.view_model import OrderListState
from src.op_overrides.application.store import AddressOverrideStore
from src.op_overrides.infrastructure.factory import get_override_store
from src.op_shopify.domain.source import OrderDataSourceProtocol
from src.op_shopify.infrastructure.client import get_shopify_client

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(
    source: Annotated[OrderDataSourceProtocol, Depends(get_shopify_client)],
    store: Annotated[AddressOverrideStore, Depends(get_override_store)],
) -> OrderApplicationService:
    return OrderApplicationService(source, store, fetch_limit=settings.ORDERS_FETCH_LIMIT)


Service = Annotated[OrderApplicationService, Depends(get_order_service)]


@router.get("")
async def list_orders(
    request: Request,
    svc: Service,
    search: str = Query("", description="Matches name, order number, customer name or email"),
    fulfillment: FulfillmentFilter = Query(FulfillmentFilter.ALL),
    days: int | None = Query(None, ge=0, description="Only orders from the last N days"),
    sort_by: SortKey = Query(SortKey.PURCHASE),
    direction: SortDirection = Query(SortDirection.DESC),
    selected: list[int] = Query([], description="Currently selected order ids"),
    toggle: int | None = Query(None, description="Order id to add to or remove from the selection"),
    select_all: bool = Query(False, description="Toggle between no rows and every filtered row"),
) -> ApiResponse:
    state = OrderListState(
        search=search,
        fulfillment_filter=fulfillment,
        days=days,
        sort_by=sort_by,
        direction=direction,
        selected=frozenset(selected),
    )
    if toggle is not None:
        state = state.toggle_selected(toggle)
    result = await svc.list_orders(state, select_all=select_all)
    return respond(request, result.model_dump(mode="json"))


@router.post("/bulk-fulfill")
async def bulk_fulfill(req: BulkFulfillRequest, request: Request, svc: Service) -> ApiResponse:
    outcome = await svc.bulk_fulfill(req.items)
    if not outcome.ok:
        raise BulkFulfillFailedError(outcome.failed, outcome.attempted)
    result = BulkFulfillResponse(
        ok=outcome.ok,
        attempted=outcome.attempted,
        failed=outcome.failed,
        errors=outcome.errors,
    )
    return respond(request, result.model_dump(mode="json"), message="Orders fulfilled")


@router.get("/{order_id}")
async def get_order(order_id: int, request: Request, svc: Service) -> ApiResponse:
    result = await svc.get_order(order_id)
    return respond(request, result.model_dump(mode="json"))


@router.get("/{order_id}/fulfillment-orders")
async def list_fulfillment_orders(order_id: int, request: Request, svc: Service) -> ApiResponse:
    result = await svc.list_fulfillment_orders(order_id)
    return respond(request, [fo.model_dump(mode="json") for fo in result])


@router.post("/{order_id}/fulfill")
async def fulfill_order(
    order_id: int,
    req: FulfillRequest,
    request: Request,
    svc: Service,
) -> ApiResponse:
    fulfillment = await svc.fulfill_order(order_id, req)
    return respond(request, fulfillment, message="Order fulfilled")
