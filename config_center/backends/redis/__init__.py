"""Redis store backend."""

from config_center.backends.redis.adapter import RedisStore

__all__ = ["RedisStore"]
