"""OverrideApplicationService — edit-form flows on top of AddressOverrideStore.

The original-address snapshot is always taken from Shopify's current
canonical address, never from the client payload.
"""

from src.op_common.errors import (
    NoShippingAddressError,
    OrderNotFoundError,
    OverrideNotFoundError,
    UpstreamNotFoundError,
)
from src.op_overrides.application.schemas import (
    OverrideListResponse,
    OverrideResponse,
    SaveOverrideRequest,
)
from src.op_overrides.application.store import AddressOverrideStore
from src.op_overrides.domain.address import canonicalize
from src.op_shopify.domain.source import OrderDataSourceProtocol


class OverrideApplicationService:
    def __init__(self, store: AddressOverrideStore, source: OrderDataSourceProtocol) -> None:
        self._store = store
        self._source = source

    async def save_for_order(self, order_id: int, req: SaveOverrideRequest) -> OverrideResponse:
        try:
            order = await self._source.get_order(order_id)
        except UpstreamNotFoundError as exc:
            raise OrderNotFoundError(order_id) from exc
        original = canonicalize(order.shipping_address, order.customer)
        if original is None:
            raise NoShippingAddressError(order_id)
        override = await self._store.save(order_id, req.to_domain(), original)
        return OverrideResponse.from_domain(order_id, override)

    async def get(self, order_id: int) -> OverrideResponse:
        override = await self._store.get(order_id)
        if override is None:
            raise OverrideNotFoundError(order_id)
        return OverrideResponse.from_domain(order_id, override)

    async def revert(self, order_id: int) -> None:
        await self._store.revert(order_id)

    async def list_all(self) -> OverrideListResponse:
        items = [OverrideResponse.from_domain(oid, o) for oid, o in await self._store.list_all()]
        return OverrideListResponse(items=items, count=len(items))
