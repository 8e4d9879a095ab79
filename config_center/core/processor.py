"""Watch loop that turns store change signals into value snapshots."""

import asyncio
import logging
from typing import Mapping, Optional, Protocol, Sequence

from config_center.backends.base import StoreClient
from config_center.config import WatchConfig

logger = logging.getLogger(__name__)


class ChangedListener(Protocol):
    """Notified with the current values whenever a watched key changes."""

    async def changed(self, values: Mapping[str, str]) -> None:
        ...


class WatchRegistration:
    """One running watch: its keys, cursor, stop signal and loop task."""

    def __init__(
        self,
        prefixes: Sequence[str],
        store: StoreClient,
        listener: ChangedListener,
        config: WatchConfig,
    ) -> None:
        self.prefixes = tuple(prefixes)
        self.cursor = 0
        self.errors: asyncio.Queue[Exception] = asyncio.Queue(maxsize=config.error_queue_size)
        self._store = store
        self._listener = listener
        self._config = config
        self._stop = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())
            logger.info("Watching %s", ", ".join(self.prefixes))

    async def stop(self) -> None:
        """Signal the loop and wait for it to leave its current watch call."""
        self._stop.set()
        if self._task is not None:
            await self._task
            logger.info("Stopped watching %s", ", ".join(self.prefixes))

    def _report(self, error: Exception) -> None:
        try:
            self.errors.put_nowait(error)
        except asyncio.QueueFull:
            logger.warning("Watch error queue full, dropping: %s", error)

    async def _backoff(self) -> None:
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=self._config.retry_interval)
        except TimeoutError:
            pass

    async def _notify(self) -> bool:
        """Read and deliver the watched values; False if the read failed."""
        try:
            values = await self._store.get_values(self.prefixes)
        except Exception as e:
            logger.warning(
                "Reading %s failed, retrying in %ss: %s",
                ", ".join(self.prefixes),
                self._config.retry_interval,
                e,
            )
            self._report(e)
            return False
        try:
            await self._listener.changed(values)
        except Exception:
            logger.exception("Changed listener failed for %s", ", ".join(self.prefixes))
        return True

    async def _run(self) -> None:
        while not self._stop.is_set():
            try:
                cursor = await self._store.watch_prefix(self.prefixes, self.cursor, self._stop)
            except Exception as e:
                logger.warning(
                    "Watch on %s failed, retrying in %ss: %s",
                    ", ".join(self.prefixes),
                    self._config.retry_interval,
                    e,
                )
                self._report(e)
                await self._backoff()
                continue

            if self._stop.is_set():
                break
            if self.cursor > 0 and cursor > 0 and not await self._notify():
                # Old cursor kept: the next watch returns at once and the read is retried.
                await self._backoff()
                continue
            self.cursor = cursor


class WatchProcessor:
    """Starts independent watch registrations against one shared store."""

    def __init__(self, store: StoreClient, config: Optional[WatchConfig] = None) -> None:
        self._store = store
        self._config = config or WatchConfig()

    async def start(self, prefixes: Sequence[str], listener: ChangedListener) -> WatchRegistration:
        """Seed ``listener`` with the current values, then watch in the background.

        The seed read runs before this returns, so a caller always sees the
        initial values before any change notification. Errors from the seed
        read propagate; errors inside the loop are retried.
        """
        if not prefixes:
            raise ValueError("at least one key to watch is required")
        registration = WatchRegistration(prefixes, self._store, listener, self._config)
        # Take the cursor before the seed read so writes in between are not lost.
        registration.cursor = await self._store.watch_prefix(
            registration.prefixes, 0, asyncio.Event()
        )
        values = await self._store.get_values(registration.prefixes)
        await listener.changed(values)
        registration.start()
        return registration
