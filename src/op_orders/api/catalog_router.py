"""Read-only Shopify catalog endpoints plus the dashboard summary.

GET /products   — products with variants and stock
GET /customers  — customers with order counts
GET /shop       — store metadata
GET /dashboard  — today / weekly figures, recent orders, low stock
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from config.settings import settings
from src.op_common.response import ApiResponse, respond
from src.op_orders.application.catalog_service import CatalogService
from src.op_shopify.domain.source import OrderDataSourceProtocol
from src.op_shopify.infrastructure.client import get_shopify_client

router = APIRouter(tags=["catalog"])


def get_catalog_service(
    source: Annotated[OrderDataSourceProtocol, Depends(get_shopify_client)],
) -> CatalogService:
    return CatalogService(
        source,
        store_timezone=settings.STORE_TIMEZONE,
        fetch_limit=settings.ORDERS_FETCH_LIMIT,
    )


Service = Annotated[CatalogService, Depends(get_catalog_service)]


@router.get("/products")
async def list_products(
    request: Request,
    svc: Service,
    limit: int = Query(50, ge=1, le=250),
) -> ApiResponse:
    result = await svc.list_products(limit=limit)
    return respond(request, [p.model_dump(mode="json") for p in result])


@router.get("/customers")
async def list_customers(
    request: Request,
    svc: Service,
    limit: int = Query(50, ge=1, le=250),
) -> ApiResponse:
    result = await svc.list_customers(limit=limit)
    return respond(request, [c.model_dump(mode="json") for c in result])


@router.get("/shop")
async def get_shop(request: Request, svc: Service) -> ApiResponse:
    result = await svc.get_shop()
    return respond(request, result.model_dump(mode="json"))


@router.get("/dashboard")
async def get_dashboard(request: Request, svc: Service) -> ApiResponse:
    result = await svc.dashboard()
    return respond(request, result.model_dump(mode="json"))
