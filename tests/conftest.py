"""Pytest configuration and shared fixtures."""

import pytest

from config_center.backends.memory import MemoryStore
from config_center.config import WatchConfig


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def watch_config() -> WatchConfig:
    return WatchConfig(retry_interval=0.05)
