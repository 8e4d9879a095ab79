"""Exception hierarchy for the config center."""


class ConfigCenterError(Exception):
    """Base class for every error raised by config_center."""


class InvalidEventKeyError(ConfigCenterError, ValueError):
    """Event key is empty or does not match ``[a-z][a-z0-9-]*``."""


class NilEventError(ConfigCenterError, ValueError):
    """Publish was called without an event."""


class AlreadyPublishedError(ConfigCenterError):
    """The event instance has already been published."""


class PayloadTooLargeError(ConfigCenterError):
    """The serialized event exceeds the payload limit."""


class SerializationError(ConfigCenterError):
    """A value could not be encoded or decoded."""


class BackendUnavailableError(ConfigCenterError):
    """The store backend failed; callers in the watch loop retry."""


class NodeExistsError(ConfigCenterError):
    """A create targeted a path that already holds a value."""

    def __init__(self, path: str) -> None:
        super().__init__(f"node already exists: {path}")
        self.path = path


class NodeNotFoundError(ConfigCenterError):
    """A modify or delete targeted a path with no value."""

    def __init__(self, path: str) -> None:
        super().__init__(f"node not found: {path}")
        self.path = path
