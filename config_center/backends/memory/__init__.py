"""In-process store backend."""

from config_center.backends.memory.adapter import MemoryStore

__all__ = ["MemoryStore"]
