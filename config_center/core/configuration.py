"""Namespaced configuration reads and watches.

Entries live under ``{namespace}/{app}/{group}[/{tag}]/{name}``. Each
business system reads its own subtree and can watch it for changes.
"""

import logging
from typing import Optional, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from config_center.backends.base import StoreClient, Value
from config_center.config import WatchConfig
from config_center.core.processor import ChangedListener, WatchProcessor, WatchRegistration
from config_center.errors import SerializationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Configuration:
    """Reads configuration entries and keeps listeners up to date."""

    def __init__(
        self,
        store: StoreClient,
        watch: Optional[WatchConfig] = None,
        namespace: str = "/system",
    ) -> None:
        self._store = store
        self._namespace = namespace
        self._processor = WatchProcessor(store, watch)
        self._registrations: list[WatchRegistration] = []

    @property
    def registrations(self) -> list[WatchRegistration]:
        return list(self._registrations)

    def mask_path(self, app: str, group: str, tag: str, name: str) -> str:
        if tag:
            return "/".join([self._namespace, app, group, tag, name])
        return "/".join([self._namespace, app, group, name])

    async def values(self, app: str, group: str, tag: str, names: Sequence[str]) -> dict[str, str]:
        paths = [self.mask_path(app, group, tag, name) for name in names]
        values = await self._store.get_values(paths)
        logger.debug("Read %s", values)
        return values

    async def string(self, app: str, group: str, tag: str, name: str) -> str:
        path = self.mask_path(app, group, tag, name)
        values = await self._store.get_values([path])
        return values.get(path, "")

    async def model(
        self, app: str, group: str, tag: str, name: str, model_type: type[ModelT]
    ) -> ModelT:
        """Decode a JSON entry into ``model_type``."""
        raw = await self.string(app, group, tag, name)
        try:
            return model_type.model_validate_json(raw)
        except ValidationError as e:
            path = self.mask_path(app, group, tag, name)
            raise SerializationError(f"cannot decode {path} as {model_type.__name__}: {e}") from e

    async def get(
        self,
        app: str,
        group: str,
        tag: str,
        names: Sequence[str],
        listener: ChangedListener,
    ) -> WatchRegistration:
        """Deliver the current values to ``listener`` and keep watching them."""
        paths = [self.mask_path(app, group, tag, name) for name in names]
        registration = await self._processor.start(paths, listener)
        self._registrations.append(registration)
        return registration

    async def add(self, path: str, value: Value) -> str:
        return await self._store.add(path, value)

    async def stop(self) -> None:
        for registration in self._registrations:
            await registration.stop()
        self._registrations.clear()
