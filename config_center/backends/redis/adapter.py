"""Redis store backend on redis.asyncio with pub/sub change notices."""

import asyncio
import logging
import re
from typing import AsyncIterator, Optional, Sequence

import redis.asyncio as redis_lib
from redis.exceptions import RedisError

from config_center.backends.base import Value, matches_any, to_text
from config_center.config import RedisConfig
from config_center.errors import BackendUnavailableError, NodeExistsError, NodeNotFoundError

logger = logging.getLogger(__name__)

# KEYS: nodes hash, revisions hash, revision counter
# ARGV: path, value, mode (add|modify|delete), channel
_WRITE_SCRIPT = """
local exists = redis.call('HEXISTS', KEYS[1], ARGV[1]) == 1
if ARGV[3] == 'add' and exists then return -1 end
if ARGV[3] ~= 'add' and not exists then return -2 end
local rev = redis.call('INCR', KEYS[3])
if ARGV[3] == 'delete' then
    redis.call('HDEL', KEYS[1], ARGV[1])
else
    redis.call('HSET', KEYS[1], ARGV[1], ARGV[2])
end
redis.call('HSET', KEYS[2], ARGV[1], rev)
redis.call('PUBLISH', ARGV[4], rev .. ' ' .. ARGV[1])
return rev
"""

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _glob_escape(text: str) -> str:
    return _GLOB_SPECIAL.sub(r"\\\1", text)


class RedisStore:
    """Hierarchical store over two Redis hashes and a revision counter."""

    def __init__(self, config: RedisConfig, client: Optional[redis_lib.Redis] = None) -> None:
        self._config = config
        self._redis = client or redis_lib.Redis(
            host=config.host,
            port=config.port,
            db=config.db,
            password=config.password,
            decode_responses=True,
        )
        ns = config.namespace
        self._nodes_key = f"{ns}:nodes"
        self._revisions_key = f"{ns}:revisions"
        self._counter_key = f"{ns}:revision"
        self._channel = f"{ns}:changes"
        self._write_script = self._redis.register_script(_WRITE_SCRIPT)

    async def _scan_below(self, name: str, key: str) -> AsyncIterator[tuple[str, str]]:
        match = _glob_escape(key.rstrip("/")) + "/*"
        async for field, value in self._redis.hscan_iter(name, match=match):
            yield field, value

    async def get_values(self, keys: Sequence[str]) -> dict[str, str]:
        values: dict[str, str] = {}
        try:
            for key in keys:
                values[key] = await self._redis.hget(self._nodes_key, key) or ""
                async for path, value in self._scan_below(self._nodes_key, key):
                    values[path] = value
        except RedisError as e:
            raise BackendUnavailableError(f"redis read failed: {e}") from e
        return values

    async def _latest(self, keys: Sequence[str]) -> int:
        latest = 0
        for key in keys:
            rev = await self._redis.hget(self._revisions_key, key)
            if rev is not None:
                latest = max(latest, int(rev))
            async for _, rev in self._scan_below(self._revisions_key, key):
                latest = max(latest, int(rev))
        return latest

    async def watch_prefix(self, keys: Sequence[str], cursor: int, stop: asyncio.Event) -> int:
        try:
            if cursor == 0:
                return int(await self._redis.get(self._counter_key) or 0) + 1
            return await self._wait_for_change(keys, cursor, stop)
        except RedisError as e:
            raise BackendUnavailableError(f"redis watch failed: {e}") from e

    async def _wait_for_change(self, keys: Sequence[str], cursor: int, stop: asyncio.Event) -> int:
        pubsub = self._redis.pubsub()
        # Subscribe before scanning so no write between the two is lost.
        await pubsub.subscribe(self._channel)
        try:
            latest = await self._latest(keys)
            if latest >= cursor:
                return latest + 1
            while not stop.is_set():
                message = await pubsub.get_message(
                    ignore_subscribe_messages=True, timeout=self._config.poll_interval
                )
                if message is None:
                    continue
                rev, _, path = message["data"].partition(" ")
                if int(rev) >= cursor and matches_any(path, keys):
                    return int(rev) + 1
            return cursor
        finally:
            await pubsub.unsubscribe(self._channel)
            await pubsub.aclose()

    async def _write(self, path: str, value: str, mode: str) -> int:
        try:
            rev = await self._write_script(
                keys=[self._nodes_key, self._revisions_key, self._counter_key],
                args=[path, value, mode, self._channel],
            )
        except RedisError as e:
            raise BackendUnavailableError(f"redis {mode} failed: {e}") from e
        rev = int(rev)
        if rev == -1:
            raise NodeExistsError(path)
        if rev == -2:
            raise NodeNotFoundError(path)
        logger.debug("%s %s at revision %d", mode, path, rev)
        return rev

    async def add(self, path: str, value: Value) -> str:
        await self._write(path, to_text(value), "add")
        return path

    async def modify(self, path: str, value: Value) -> None:
        await self._write(path, to_text(value), "modify")

    async def delete(self, path: str) -> None:
        await self._write(path, "", "delete")

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            raise BackendUnavailableError(f"redis ping failed: {e}") from e

    async def close(self) -> None:
        await self._redis.aclose()
