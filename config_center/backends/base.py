"""Store contract consumed by the watch processor and event engine."""

import asyncio
from typing import Iterable, Mapping, Protocol, Sequence, Union

Value = Union[str, bytes]


class StoreClient(Protocol):
    """Protocol for hierarchical key/value stores (in-memory, Redis)."""

    async def get_values(self, keys: Sequence[str]) -> dict[str, str]:
        """Read each key and every entry below it; missing keys map to ''."""
        ...

    async def watch_prefix(self, keys: Sequence[str], cursor: int, stop: asyncio.Event) -> int:
        """Block until an entry at or below ``keys`` reaches revision ``cursor``.

        Returns the next cursor to wait on. A cursor of 0 returns at once with
        a positive cursor; a fired ``stop`` returns ``cursor`` unchanged.
        """
        ...

    async def add(self, path: str, value: Value) -> str:
        """Create ``path``; raises NodeExistsError if it already exists."""
        ...

    async def modify(self, path: str, value: Value) -> None:
        """Overwrite ``path``; raises NodeNotFoundError if it is missing."""
        ...

    async def delete(self, path: str) -> None:
        """Remove ``path``; raises NodeNotFoundError if it is missing."""
        ...

    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        ...


def is_under(path: str, prefix: str) -> bool:
    """True if ``path`` equals ``prefix`` or lies below it."""
    if path == prefix:
        return True
    return path.startswith(prefix.rstrip("/") + "/")


def matches_any(path: str, prefixes: Iterable[str]) -> bool:
    return any(is_under(path, prefix) for prefix in prefixes)


def to_text(value: Value) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def collect_values(keys: Sequence[str], nodes: Mapping[str, str]) -> dict[str, str]:
    """Resolve a batch read against a flat path -> value mapping."""
    values: dict[str, str] = {}
    for key in keys:
        values[key] = nodes.get(key, "")
        for path, value in nodes.items():
            if path != key and is_under(path, key):
                values[path] = value
    return values
