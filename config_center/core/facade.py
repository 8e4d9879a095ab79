"""ConfigCenter façade - store lifecycle plus configuration and events."""

from types import TracebackType
from typing import Optional, Self

from config_center.backends import StoreClient, new_store
from config_center.config import ConfigCenterConfig
from config_center.core.configuration import Configuration
from config_center.core.engine import EventEngine
from config_center.core.health import Health
from config_center.core.processor import WatchRegistration


class ConfigCenter:
    """Unified façade - lifecycle + access to configuration and events."""

    def __init__(self, config: Optional[ConfigCenterConfig] = None) -> None:
        self._config = config or ConfigCenterConfig()
        self._store: Optional[StoreClient] = None
        self._configuration: Optional[Configuration] = None
        self._events: Optional[EventEngine] = None

    @property
    def store(self) -> StoreClient:
        if self._store is None:
            raise RuntimeError("ConfigCenter not started. Call start() first.")
        return self._store

    @property
    def configuration(self) -> Configuration:
        if self._configuration is None:
            raise RuntimeError("ConfigCenter not started. Call start() first.")
        return self._configuration

    @property
    def events(self) -> EventEngine:
        if self._events is None:
            raise RuntimeError("ConfigCenter not started. Call start() first.")
        return self._events

    async def _connect_store(self) -> None:
        self._store = new_store(self._config.store)

    async def _disconnect_store(self) -> None:
        if self._store:
            await self._store.close()
            self._store = None

    async def start(self) -> None:
        """Connect the store and build the configuration and event engines."""
        if self._store is not None:
            raise RuntimeError("ConfigCenter already started. Call stop() first.")
        await self._connect_store()
        self._configuration = Configuration(
            self.store, self._config.watch, self._config.namespace
        )
        self._events = EventEngine(self.store, self._config.events, self._config.watch)

    async def stop(self) -> None:
        """Stop every watch, then close the store."""
        if self._events:
            await self._events.stop()
            self._events = None
        if self._configuration:
            await self._configuration.stop()
            self._configuration = None
        await self._disconnect_store()

    async def health(self) -> Health:
        """Ping the store and count running watches and their pending errors."""
        all_ok = True
        try:
            if self._store:
                await self._store.ping()
                store = "ok"
            else:
                store = "not connected"
                all_ok = False
        except Exception as e:
            store = f"error: {e}"
            all_ok = False

        registrations: list[WatchRegistration] = []
        listening = False
        if self._events and self._events.registration:
            listening = self._events.registration.running
            registrations.append(self._events.registration)
        watches = self._configuration.registrations if self._configuration else []
        registrations.extend(watches)

        return Health(
            ok=all_ok,
            store=store,
            listening=listening,
            active_watches=sum(1 for r in watches if r.running),
            errors={
                ", ".join(r.prefixes): r.errors.qsize()
                for r in registrations
                if not r.errors.empty()
            },
        )

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.stop()
