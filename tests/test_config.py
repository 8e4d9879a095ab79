"""Tests for configuration dataclasses."""

from config_center.config import (
    ConfigCenterConfig,
    EventConfig,
    RedisConfig,
    StoreConfig,
    WatchConfig,
)


def test_redis_config_defaults():
    config = RedisConfig()
    assert config.host == "localhost"
    assert config.port == 6379
    assert config.db == 0
    assert config.password is None
    assert config.namespace == "config_center"


def test_store_config_defaults():
    config = StoreConfig()
    assert config.backend == "redis"
    assert config.redis == RedisConfig()
    assert config.seed == {}


def test_watch_config_defaults():
    config = WatchConfig()
    assert config.retry_interval == 2.0
    assert config.error_queue_size == 10


def test_event_config_defaults():
    config = EventConfig()
    assert config.root == "/system_events"
    assert config.deliver_timed_out is False


def test_config_center_config():
    config = ConfigCenterConfig()
    assert config.namespace == "/system"
    assert config.store.backend == "redis"
    assert config.events.root == "/system_events"


def test_config_override():
    config = StoreConfig(
        backend="memory",
        redis=RedisConfig(host="redis.prod.internal", port=6380, password="secret"),
        seed={"/system/base/cache/provider": "{}"},
    )
    assert config.redis.host == "redis.prod.internal"
    assert config.redis.port == 6380
    assert config.redis.password == "secret"
    assert config.seed["/system/base/cache/provider"] == "{}"
