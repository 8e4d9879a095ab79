"""Health check types."""

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class Health:
    """Store reachability and watch activity of a config center."""

    ok: bool
    store: str  # "ok" | "not connected" | "error: ..."
    listening: bool = False  # event engine loop running
    active_watches: int = 0  # running configuration watches
    errors: Mapping[str, int] = field(default_factory=dict)  # prefix set -> queued loop errors

    @property
    def details(self) -> dict[str, object]:
        return {
            "store": self.store,
            "listening": self.listening,
            "active_watches": self.active_watches,
            "errors": dict(self.errors),
        }
