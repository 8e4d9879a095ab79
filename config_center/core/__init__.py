"""Core components for the config center."""

from config_center.core.configuration import Configuration
from config_center.core.engine import EventDispatcher, EventEngine, ListenerTable
from config_center.core.events import Event, EventListener
from config_center.core.facade import ConfigCenter
from config_center.core.health import Health
from config_center.core.processor import ChangedListener, WatchProcessor, WatchRegistration

__all__ = [
    "ChangedListener",
    "WatchProcessor",
    "WatchRegistration",
    "Event",
    "EventListener",
    "EventDispatcher",
    "EventEngine",
    "ListenerTable",
    "Configuration",
    "ConfigCenter",
    "Health",
]
