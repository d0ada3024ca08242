"""OverrideStorageProtocol implementations.

RedisOverrideStorage is the durable default. InMemoryOverrideStorage keeps
records in a dict for the life of the process (OVERRIDE_BACKEND=memory, tests).
"""

import redis.asyncio as aioredis


class RedisOverrideStorage:
    def __init__(self, redis: aioredis.Redis) -> None:
        self._redis = redis

    async def get(self, key: str) -> str | None:
        return await self._redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)

    async def keys(self, prefix: str) -> list[str]:
        # SCAN, not KEYS
        return [key async for key in self._redis.scan_iter(match=f"{prefix}*")]


class InMemoryOverrideStorage:
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self, prefix: str) -> list[str]:
        return [key for key in self._data if key.startswith(prefix)]
