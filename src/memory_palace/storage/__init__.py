"""
Storage protocols for memories and rooms.

Provides the protocol definition for storage backends and an in-memory
implementation. The core only ever reads snapshots from a store.
"""

from memory_palace.storage.memory import InMemoryMemoryStore
from memory_palace.storage.protocols import MemoryStore

__all__ = [
    "InMemoryMemoryStore",
    "MemoryStore",
]
