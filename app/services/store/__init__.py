"""
Record stores consumed by the profile core.

get_store() returns the process-wide store selected by STORE_BACKEND.
"""

from loguru import logger

from app.core.config import settings
from app.services.store.base import ProfileStore
from app.services.store.memory import InMemoryStore
from app.services.store.redis_store import RedisStore

_store: ProfileStore | None = None


def create_store() -> ProfileStore:
    if settings.STORE_BACKEND == "redis":
        logger.info("Using Redis record store")
        return RedisStore()
    if settings.SEED_DATA_PATH:
        return InMemoryStore.from_json(settings.SEED_DATA_PATH)
    logger.info("Using empty in-memory record store")
    return InMemoryStore()


def get_store() -> ProfileStore:
    global _store
    if _store is None:
        _store = create_store()
    return _store


async def close_store() -> None:
    global _store
    if _store is not None:
        await _store.close()
        _store = None


__all__ = ["ProfileStore", "InMemoryStore", "RedisStore", "create_store", "get_store", "close_store"]
