"""op_overrides REST endpoints — local-only shipping address corrections.

GET    /overrides              — every order with an active override
GET    /overrides/{order_id}   — one override (404 when none)
PUT    /overrides/{order_id}   — create or update (snapshot kept from first save)
DELETE /overrides/{order_id}   — revert to the Shopify address
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.op_common.response import ApiResponse, respond
from src.op_overrides.application.schemas import SaveOverrideRequest
from src.op_overrides.application.service import OverrideApplicationService
from src.op_overrides.application.store import AddressOverrideStore
from src.op_overrides.infrastructure.factory import get_override_store
from src.op_shopify.domain.source import OrderDataSourceProtocol
from src.op_shopify.infrastructure.client import get_shopify_client

router = APIRouter(prefix="/overrides", tags=["overrides"])


def get_override_service(
    store: Annotated[AddressOverrideStore, Depends(get_override_store)],
    source: Annotated[OrderDataSourceProtocol, Depends(get_shopify_client)],
) -> OverrideApplicationService:
    return OverrideApplicationService(store, source)


Service = Annotated[OverrideApplicationService, Depends(get_override_service)]


@router.get("")
async def list_overrides(request: Request, svc: Service) -> ApiResponse:
    result = await svc.list_all()
    return respond(request, result.model_dump(mode="json"))


@router.get("/{order_id}")
async def get_override(order_id: int, request: Request, svc: Service) -> ApiResponse:
    result = await svc.get(order_id)
    return respond(request, result.model_dump(mode="json"))


@router.put("/{order_id}")
async def save_override(
    order_id: int,
    req: SaveOverrideRequest,
    request: Request,
    svc: Service,
) -> ApiResponse:
    result = await svc.save_for_order(order_id, req)
    return respond(request, result.model_dump(mode="json"), message="Address saved locally")


@router.delete("/{order_id}")
async def revert_override(order_id: int, request: Request, svc: Service) -> ApiResponse:
    await svc.revert(order_id)
    return respond(request, {"order_id": str(order_id), "reverted": True})
