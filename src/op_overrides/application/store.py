"""AddressOverrideStore — per-order local address overrides.

Invariant: the original-address snapshot is written exactly once, on the
first save for an order. Later saves replace only the edited address and
the timestamp, so revert always has the true source-of-record to go back to.

Reads are tolerant: an unreadable record behaves as "no override".
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from src.op_common.datetime_utils import utc_now
from src.op_overrides.domain.codec import decode_override, encode_override
from src.op_overrides.domain.models import AddressOverride, EditedAddress
from src.op_overrides.domain.storage import OverrideStorageProtocol

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "order_address_"


@dataclass(frozen=True)
class OverrideSnapshot:
    """Overrides for a fixed batch of orders, loaded once; synchronous reads."""

    overrides: dict[str, AddressOverride] = field(default_factory=dict)

    def get(self, order_id: int | str) -> AddressOverride | None:
        return self.overrides.get(str(order_id))

    def has(self, order_id: int | str) -> bool:
        return str(order_id) in self.overrides

    def resolve(self, order_id: int | str, canonical: EditedAddress | None) -> EditedAddress | None:
        override = self.get(order_id)
        return override.address if override is not None else canonical


class AddressOverrideStore:
    def __init__(
        self,
        storage: OverrideStorageProtocol,
        prefix: str = DEFAULT_KEY_PREFIX,
        clock=utc_now,
    ) -> None:
        self._storage = storage
        self._prefix = prefix
        self._clock = clock

    def key_for(self, order_id: int | str) -> str:
        return f"{self._prefix}{order_id}"

    async def get(self, order_id: int | str) -> AddressOverride | None:
        return decode_override(await self._storage.get(self.key_for(order_id)))

    async def has(self, order_id: int | str) -> bool:
        return await self.get(order_id) is not None

    async def save(
        self,
        order_id: int | str,
        edited: EditedAddress,
        original: EditedAddress,
    ) -> AddressOverride:
        existing = await self.get(order_id)
        snapshot = existing.original_address if existing is not None else original
        override = AddressOverride(address=edited, original_address=snapshot, timestamp=self._clock())
        await self._storage.set(self.key_for(order_id), encode_override(override))
        logger.info(
            "Address override %s for order %s",
            "updated" if existing is not None else "created",
            order_id,
        )
        return override

    async def resolve(
        self,
        order_id: int | str,
        canonical: EditedAddress | None,
    ) -> EditedAddress | None:
        override = await self.get(order_id)
        return override.address if override is not None else canonical

    async def revert(self, order_id: int | str) -> None:
        await self._storage.delete(self.key_for(order_id))
        logger.info("Address override reverted for order %s", order_id)

    async def list_all(self) -> list[tuple[str, AddressOverride]]:
        results: list[tuple[str, AddressOverride]] = []
        for key in sorted(await self._storage.keys(self._prefix)):
            override = decode_override(await self._storage.get(key))
            if override is not None:
                results.append((key[len(self._prefix):], override))
        return results

    async def snapshot(self, order_ids: Iterable[int | str]) -> OverrideSnapshot:
        wanted = {self.key_for(order_id): str(order_id) for order_id in order_ids}
        overrides: dict[str, AddressOverride] = {}
        # Only keys that exist are fetched; most orders have no override
        for key in await self._storage.keys(self._prefix):
            if key not in wanted:
                continue
            override = decode_override(await self._storage.get(key))
            if override is not None:
                overrides[wanted[key]] = override
        return OverrideSnapshot(overrides=overrides)
