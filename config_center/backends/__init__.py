"""Store backends and the contract they satisfy."""

from config_center.backends.base import StoreClient
from config_center.backends.memory import MemoryStore
from config_center.backends.redis import RedisStore
from config_center.config import StoreConfig


def new_store(config: StoreConfig) -> StoreClient:
    """Build the store client selected by ``config.backend``."""
    if config.backend == "redis":
        return RedisStore(config.redis)
    if config.backend == "memory":
        return MemoryStore(config.seed)
    raise ValueError(f"unknown store backend: {config.backend!r}")


__all__ = ["StoreClient", "MemoryStore", "RedisStore", "new_store"]
