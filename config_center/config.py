"""Configuration dataclasses for the config center."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RedisConfig:
    """Redis store backend configuration."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    namespace: str = "config_center"  # prefix for every key and channel
    poll_interval: float = 1.0  # seconds per pub/sub read before re-checking stop


@dataclass
class StoreConfig:
    """Store backend selection."""

    backend: str = "redis"  # "redis" | "memory"
    redis: RedisConfig = field(default_factory=RedisConfig)
    seed: dict[str, str] = field(default_factory=dict)  # initial memory contents


@dataclass
class WatchConfig:
    """Watch loop tuning."""

    retry_interval: float = 2.0
    error_queue_size: int = 10


@dataclass
class EventConfig:
    """Event engine configuration."""

    root: str = "/system_events"
    deliver_timed_out: bool = False


@dataclass
class ConfigCenterConfig:
    """Aggregate configuration for the config center."""

    store: StoreConfig = field(default_factory=StoreConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    events: EventConfig = field(default_factory=EventConfig)
    namespace: str = "/system"
