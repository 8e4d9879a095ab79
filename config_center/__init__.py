"""Live configuration and cross-process events over a hierarchical store."""

from config_center.config import (
    ConfigCenterConfig,
    StoreConfig,
    RedisConfig,
    WatchConfig,
    EventConfig,
)
from config_center.core import (
    ConfigCenter,
    Configuration,
    ChangedListener,
    WatchProcessor,
    WatchRegistration,
    Event,
    EventListener,
    EventEngine,
    Health,
)
from config_center.backends import StoreClient, MemoryStore, RedisStore, new_store
from config_center.errors import (
    ConfigCenterError,
    InvalidEventKeyError,
    NilEventError,
    AlreadyPublishedError,
    PayloadTooLargeError,
    SerializationError,
    BackendUnavailableError,
    NodeExistsError,
    NodeNotFoundError,
)

__all__ = [
    # Façade
    "ConfigCenter",
    # Config
    "ConfigCenterConfig",
    "StoreConfig",
    "RedisConfig",
    "WatchConfig",
    "EventConfig",
    # Watching
    "Configuration",
    "ChangedListener",
    "WatchProcessor",
    "WatchRegistration",
    # Events
    "Event",
    "EventListener",
    "EventEngine",
    # Health
    "Health",
    # Stores
    "StoreClient",
    "MemoryStore",
    "RedisStore",
    "new_store",
    # Errors
    "ConfigCenterError",
    "InvalidEventKeyError",
    "NilEventError",
    "AlreadyPublishedError",
    "PayloadTooLargeError",
    "SerializationError",
    "BackendUnavailableError",
    "NodeExistsError",
    "NodeNotFoundError",
]
