"""LabelApplicationService — fetch, resolve overrides once, lay out pages."""

import logging
from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from src.op_common.datetime_utils import utc_now
from src.op_common.enums import PaperSize
from src.op_labels.application.schemas import LabelSheetResponse
from src.op_labels.domain.layout import layout_labels, select_orders_for_labels
from src.op_labels.domain.models import GridGeometry
from src.op_overrides.application.store import AddressOverrideStore
from src.op_shopify.domain.source import OrderDataSourceProtocol

logger = logging.getLogger(__name__)


class LabelApplicationService:
    def __init__(
        self,
        source: OrderDataSourceProtocol,
        store: AddressOverrideStore,
        grid: GridGeometry,
        fetch_limit: int = 250,
        store_timezone: str = "UTC",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._source = source
        self._store = store
        self._grid = grid
        self._fetch_limit = fetch_limit
        self._tz = ZoneInfo(store_timezone)
        self._clock = clock

    async def build_sheet(
        self,
        refs: list[str],
        paper: PaperSize = PaperSize.CARTA,
        show_products: bool = True,
    ) -> LabelSheetResponse:
        orders = await self._source.list_orders(limit=self._fetch_limit)
        selected = select_orders_for_labels(orders, refs)
        if refs and len(selected) < len(refs):
            logger.info("Label refs %s matched %d orders", refs, len(selected))
        overrides = await self._store.snapshot(o.id for o in selected)
        pages = layout_labels(selected, overrides, page_capacity=self._grid.capacity)
        return LabelSheetResponse.build(
            pages,
            paper=paper,
            grid=self._grid,
            show_products=show_products,
            # the date printed on the sheet is the store's calendar day
            today=self._clock().astimezone(self._tz).date(),
        )
