"""Cross-system notification events.

An event carries a globally unique key, a small JSON body and a validity
window. The publisher stamps ``pub_time`` once; receivers compare it with
their local clock to decide whether the event has timed out. The JSON
encoding of a whole event may not exceed ``MAX_PAYLOAD_BYTES``.
"""

import re
import time
from typing import Any, Optional, Protocol, Sequence, Union

from pydantic import BaseModel, Field, ValidationError
from pydantic_core import PydanticSerializationError

from config_center.errors import InvalidEventKeyError, SerializationError

KEY_PATTERN = re.compile(r"[a-z][a-z0-9-]*")
DEFAULT_TIMEOUT_NS = 10_000_000_000  # 10s
MAX_PAYLOAD_BYTES = 1024


class Event(BaseModel):
    """A published (or about to be published) notification."""

    key: str = Field(frozen=True, pattern=r"^[a-z][a-z0-9-]*$")
    pub_time: int = 0  # epoch ns, set on publish
    timeout: int = DEFAULT_TIMEOUT_NS  # ns
    body: dict[str, Any] = Field(default_factory=dict)
    published: bool = False

    @classmethod
    def create(cls, key: str, timeout: int = DEFAULT_TIMEOUT_NS) -> "Event":
        """Build an unpublished event, rejecting malformed keys."""
        if not key:
            raise InvalidEventKeyError("event key must not be empty")
        if not KEY_PATTERN.fullmatch(key):
            raise InvalidEventKeyError(f"event key {key!r} does not match [a-z][a-z0-9-]*")
        return cls(key=key, timeout=timeout)

    def add_data(self, key: str, value: Any) -> "Event":
        self.body[key] = value
        return self

    def get_data(self, key: str) -> Optional[Any]:
        return self.body.get(key)

    def mark_published(self) -> "Event":
        """Stamp the publish time. Callers check ``is_published()`` first."""
        self.pub_time = time.time_ns()
        self.published = True
        return self

    def is_published(self) -> bool:
        return self.published

    def is_timed_out(self) -> bool:
        return time.time_ns() - self.pub_time > self.timeout

    def is_overloaded(self) -> bool:
        return len(self.serialize()) > MAX_PAYLOAD_BYTES

    def serialize(self) -> bytes:
        try:
            return self.model_dump_json().encode("utf-8")
        except PydanticSerializationError as e:
            raise SerializationError(f"event {self.key!r} is not JSON serializable: {e}") from e

    @classmethod
    def deserialize(cls, raw: Union[str, bytes]) -> "Event":
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise SerializationError(f"malformed event payload: {e}") from e


class EventListener(Protocol):
    """Receives events published by other systems under its keys."""

    def event_keys(self) -> Sequence[str]:
        """Event keys this listener wants; an empty sequence registers nothing."""
        ...

    async def on_event(self, event: Event) -> None:
        ...
