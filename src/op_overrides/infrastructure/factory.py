"""Builds the process-wide AddressOverrideStore from settings."""

from config.settings import settings
from src.op_common.redis_client import get_redis
from src.op_overrides.application.store import AddressOverrideStore
from src.op_overrides.infrastructure.redis_storage import (
    InMemoryOverrideStorage,
    RedisOverrideStorage,
)

_memory_storage: InMemoryOverrideStorage | None = None


async def get_override_store() -> AddressOverrideStore:
    """FastAPI dependency: store over the configured backend."""
    global _memory_storage  # noqa: PLW0603
    if settings.OVERRIDE_BACKEND == "memory":
        if _memory_storage is None:
            _memory_storage = InMemoryOverrideStorage()
        return AddressOverrideStore(_memory_storage, prefix=settings.OVERRIDE_KEY_PREFIX)
    redis = await get_redis()
    return AddressOverrideStore(RedisOverrideStorage(redis), prefix=settings.OVERRIDE_KEY_PREFIX)
