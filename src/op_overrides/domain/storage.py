# src/op_overrides/domain/storage.py
"""Key-value storage Protocol for override records.

Values are opaque strings (already-encoded JSON). Each key is addressed
independently; there are no cross-key transactions.
"""

from typing import Protocol


class OverrideStorageProtocol(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def keys(self, prefix: str) -> list[str]: ...
