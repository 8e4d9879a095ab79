"""In-process store backend with revision-based watches."""

import asyncio
import logging
from typing import Mapping, Optional, Sequence

from config_center.backends.base import Value, collect_values, matches_any, to_text
from config_center.errors import NodeExistsError, NodeNotFoundError

logger = logging.getLogger(__name__)


class MemoryStore:
    """Dict-backed store; every write bumps one global revision."""

    def __init__(self, seed: Optional[Mapping[str, str]] = None) -> None:
        self._nodes: dict[str, str] = {}
        self._revisions: dict[str, int] = {}  # path -> last modification revision
        self._revision = 0
        self._changed = asyncio.Event()
        for path, value in (seed or {}).items():
            self._write(path, value)

    @property
    def revision(self) -> int:
        return self._revision

    def _write(self, path: str, value: Optional[str]) -> int:
        self._revision += 1
        if value is None:
            self._nodes.pop(path, None)
        else:
            self._nodes[path] = value
        self._revisions[path] = self._revision
        # Wake every watcher waiting on the previous generation.
        self._changed.set()
        self._changed = asyncio.Event()
        return self._revision

    def _latest(self, keys: Sequence[str]) -> int:
        return max(
            (rev for path, rev in self._revisions.items() if matches_any(path, keys)),
            default=0,
        )

    async def get_values(self, keys: Sequence[str]) -> dict[str, str]:
        return collect_values(keys, self._nodes)

    async def watch_prefix(self, keys: Sequence[str], cursor: int, stop: asyncio.Event) -> int:
        if cursor == 0:
            return self._revision + 1

        while True:
            latest = self._latest(keys)
            if latest >= cursor:
                return latest + 1
            if stop.is_set():
                return cursor

            changed = asyncio.ensure_future(self._changed.wait())
            stopped = asyncio.ensure_future(stop.wait())
            _, pending = await asyncio.wait(
                {changed, stopped}, return_when=asyncio.FIRST_COMPLETED
            )
            for task in pending:
                task.cancel()

    async def add(self, path: str, value: Value) -> str:
        if path in self._nodes:
            raise NodeExistsError(path)
        self._write(path, to_text(value))
        return path

    async def modify(self, path: str, value: Value) -> None:
        if path not in self._nodes:
            raise NodeNotFoundError(path)
        self._write(path, to_text(value))

    async def delete(self, path: str) -> None:
        if path not in self._nodes:
            raise NodeNotFoundError(path)
        self._write(path, None)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        logger.debug("memory store closed at revision %d", self._revision)
