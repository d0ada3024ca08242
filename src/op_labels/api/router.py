"""op_labels REST endpoints.

GET /labels?orders=1001,1002&paper=carta&show_products=true
    — paginated 12-up label sheet; without `orders`, a preview of the
      first unfulfilled orders
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from config.settings import settings
from src.op_common.enums import PaperSize
from src.op_common.response import ApiResponse, respond
from src.op_labels.application.service import LabelApplicationService
from src.op_labels.domain.models import GridGeometry
from src.op_overrides.application.store import AddressOverrideStore
from src.op_overrides.infrastructure.factory import get_override_store
from src.op_shopify.domain.source import OrderDataSourceProtocol
from src.op_shopify.infrastructure.client import get_shopify_client

router = APIRouter(prefix="/labels", tags=["labels"])


def get_label_service(
    source: Annotated[OrderDataSourceProtocol, Depends(get_shopify_client)],
    store: Annotated[AddressOverrideStore, Depends(get_override_store)],
) -> LabelApplicationService:
    grid = GridGeometry(columns=settings.LABEL_GRID_COLUMNS, rows=settings.LABEL_GRID_ROWS)
    return LabelApplicationService(
        source,
        store,
        grid,
        fetch_limit=settings.ORDERS_FETCH_LIMIT,
        store_timezone=settings.STORE_TIMEZONE,
    )


@router.get("")
async def get_label_sheet(
    request: Request,
    svc: Annotated[LabelApplicationService, Depends(get_label_service)],
    orders: str | None = Query(None, description="Comma-separated ids, order numbers or names"),
    paper: PaperSize = Query(PaperSize.CARTA),
    show_products: bool = Query(True),
) -> ApiResponse:
    refs = [r for r in (orders or "").split(",") if r.strip()]
    result = await svc.build_sheet(refs, paper=paper, show_products=show_products)
    return respond(request, result.model_dump(mode="json"))
