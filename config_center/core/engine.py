"""Publish/subscribe for events on top of the store and watch processor."""

import logging
from typing import Iterable, Mapping, Optional

from config_center.backends.base import StoreClient
from config_center.config import EventConfig, WatchConfig
from config_center.core.events import Event, EventListener
from config_center.core.processor import WatchProcessor, WatchRegistration
from config_center.errors import (
    AlreadyPublishedError,
    NilEventError,
    NodeExistsError,
    PayloadTooLargeError,
    SerializationError,
)

logger = logging.getLogger(__name__)


class ListenerTable:
    """Event key -> listeners, in registration order. Built once, then read-only."""

    def __init__(self, listeners: Iterable[EventListener]) -> None:
        self._table: dict[str, list[EventListener]] = {}
        for listener in listeners:
            for key in listener.event_keys() or ():
                if not key:
                    continue
                self._table.setdefault(key, []).append(listener)

    def get(self, key: str) -> tuple[EventListener, ...]:
        return tuple(self._table.get(key, ()))

    def keys(self) -> list[str]:
        return list(self._table)

    def __len__(self) -> int:
        return len(self._table)


class EventDispatcher:
    """Changed listener that decodes stored events and fans them out by key."""

    def __init__(self, table: ListenerTable, deliver_timed_out: bool = False) -> None:
        self._table = table
        self._deliver_timed_out = deliver_timed_out

    async def changed(self, values: Mapping[str, str]) -> None:
        for path, raw in values.items():
            try:
                event = Event.deserialize(raw)
            except SerializationError:
                logger.debug("Dropping malformed event at %s", path)
                continue

            if not self._deliver_timed_out and event.is_timed_out():
                logger.debug("Skipping timed out event %s", event.key)
                continue

            for listener in self._table.get(event.key):
                try:
                    await listener.on_event(event)
                except Exception:
                    logger.exception("Event listener failed for %s", event.key)


class EventEngine:
    """Publishes events under the event root and dispatches received ones."""

    def __init__(
        self,
        store: StoreClient,
        config: Optional[EventConfig] = None,
        watch: Optional[WatchConfig] = None,
    ) -> None:
        self._store = store
        self._config = config or EventConfig()
        self._processor = WatchProcessor(store, watch)
        self._registration: Optional[WatchRegistration] = None

    @property
    def root(self) -> str:
        return self._config.root

    @property
    def registration(self) -> Optional[WatchRegistration]:
        return self._registration

    def path_for(self, event: Event) -> str:
        return f"{self._config.root.rstrip('/')}/{event.key}"

    async def publish(self, event: Optional[Event]) -> Event:
        """Validate, stamp and store ``event``. Nothing is written on rejection."""
        if event is None:
            raise NilEventError("cannot publish a missing event")
        if event.is_published():
            raise AlreadyPublishedError(f"event {event.key!r} was already published")
        # Measure the stamped form; the event itself stays unpublished on rejection.
        stamped = event.model_copy(deep=True).mark_published()
        if stamped.is_overloaded():
            raise PayloadTooLargeError(f"event {event.key!r} payload exceeds the size limit")

        event.pub_time = stamped.pub_time
        event.published = True
        payload = event.serialize()
        path = self.path_for(event)
        try:
            await self._store.add(path, payload)
        except NodeExistsError:
            await self._store.modify(path, payload)
        logger.info("Published event %s", event.key)
        return event

    async def start_listening(self, listeners: Iterable[EventListener]) -> WatchRegistration:
        if self._registration is not None:
            raise RuntimeError("event listening already started")
        table = ListenerTable(listeners)
        dispatcher = EventDispatcher(table, self._config.deliver_timed_out)
        self._registration = await self._processor.start([self._config.root], dispatcher)
        logger.info("Event engine listening for %s", ", ".join(table.keys()) or "nothing")
        return self._registration

    async def stop(self) -> None:
        if self._registration is not None:
            await self._registration.stop()
            self._registration = None
