"""
In-memory memory and room storage implementation.

Provides a simple in-memory store suitable for testing and single-device
use. Data is lost on restart.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from memory_palace.models import Memory, Room

logger = logging.getLogger(__name__)

IMMUTABLE_MEMORY_FIELDS = frozenset({"id", "content", "kind", "created_at", "user_id"})
IMMUTABLE_ROOM_FIELDS = frozenset({"id", "created_at", "memory_count"})


def _matches_text(memory: Memory, needle: str) -> bool:
    return (
        needle in memory.content.lower()
        or (memory.summary is not None and needle in memory.summary.lower())
        or any(needle in tag for tag in memory.tags)
    )


class InMemoryMemoryStore:
    """
    In-memory implementation of the MemoryStore protocol.

    Stores memories and rooms in dictionaries keyed by ID and maintains
    each room's ``memory_count`` as memories are added, moved and deleted.
    """

    def __init__(self):
        self._memories: Dict[str, Memory] = {}
        self._rooms: Dict[str, Room] = {}

        logger.info("InMemoryMemoryStore initialized")

    def _adjust_room_count(self, room_id: Optional[str], delta: int) -> None:
        room = self._rooms.get(room_id) if room_id else None
        if room is not None:
            self._rooms[room_id] = room.model_copy(
                update={"memory_count": max(0, room.memory_count + delta)}
            )

    def add_memory(self, memory: Memory) -> str:
        """Add a memory to the store."""
        if memory.id in self._memories:
            raise ValueError(f"Memory {memory.id} already exists")

        self._memories[memory.id] = memory
        self._adjust_room_count(memory.room_id, 1)

        logger.debug(f"Inserted memory {memory.id}: '{memory.content[:50]}...'")
        return memory.id

    def get_memory(self, memory_id: str) -> Optional[Memory]:
        return self._memories.get(memory_id)

    def update_memory(self, memory_id: str, **updates) -> Memory:
        """Update mutable fields of a memory and bump ``updated_at``."""
        memory = self._memories.get(memory_id)
        if memory is None:
            raise KeyError(f"Memory {memory_id} not found")

        immutable = IMMUTABLE_MEMORY_FIELDS & updates.keys()
        if immutable:
            raise ValueError(f"Cannot update immutable memory fields: {sorted(immutable)}")

        # Re-validate so tags and connections stay normalized
        updated = Memory.model_validate(
            {**memory.model_dump(), **updates, "updated_at": datetime.now()}
        )
        self._memories[memory_id] = updated

        if updated.room_id != memory.room_id:
            self._adjust_room_count(memory.room_id, -1)
            self._adjust_room_count(updated.room_id, 1)

        logger.debug(f"Updated memory {memory_id}: {sorted(updates)}")
        return updated

    def delete_memory(self, memory_id: str) -> bool:
        memory = self._memories.pop(memory_id, None)
        if memory is None:
            return False

        self._adjust_room_count(memory.room_id, -1)
        logger.debug(f"Deleted memory {memory_id}")
        return True

    def list_memories(self) -> List[Memory]:
        return sorted(self._memories.values(), key=lambda m: m.created_at, reverse=True)

    def query_memories(
        self,
        room_id: Optional[str] = None,
        tag: Optional[str] = None,
        kind: Optional[str] = None,
        text: Optional[str] = None,
    ) -> List[Memory]:
        """
        Memories matching every given filter, newest first.

        ``text`` is a case-insensitive substring match against the content,
        the summary and each tag.
        """
        needle = text.lower() if text and text.strip() else ""
        results = []
        for memory in self.list_memories():
            if room_id is not None and memory.room_id != room_id:
                continue
            if tag is not None and tag.lower() not in memory.tags:
                continue
            if kind is not None and memory.kind != kind:
                continue
            if needle and not _matches_text(memory, needle):
                continue
            results.append(memory)
        return results

    def add_connections(self, memory_id: str, connection_ids: List[str]) -> Memory:
        """Link a memory to other memories, ignoring self-links and unknown IDs."""
        memory = self._memories.get(memory_id)
        if memory is None:
            raise KeyError(f"Memory {memory_id} not found")

        new_ids = [
            cid
            for cid in connection_ids
            if cid != memory_id and cid in self._memories and cid not in memory.connections
        ]
        if not new_ids:
            return memory

        return self.update_memory(memory_id, connections=memory.connections + new_ids)

    def add_room(self, room: Room) -> str:
        if room.id in self._rooms:
            raise ValueError(f"Room {room.id} already exists")

        count = sum(1 for m in self._memories.values() if m.room_id == room.id)
        self._rooms[room.id] = room.model_copy(update={"memory_count": count})

        logger.info(f"Added room {room.id}: {room.name}")
        return room.id

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def update_room(self, room_id: str, **updates) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise KeyError(f"Room {room_id} not found")

        immutable = IMMUTABLE_ROOM_FIELDS & updates.keys()
        if immutable:
            raise ValueError(f"Cannot update room fields: {sorted(immutable)}")

        updated = Room.model_validate({**room.model_dump(), **updates})
        self._rooms[room_id] = updated
        return updated

    def delete_room(self, room_id: str) -> bool:
        """Delete a room; its memories keep a dangling ``room_id``."""
        if self._rooms.pop(room_id, None) is None:
            return False

        logger.info(f"Deleted room {room_id}")
        return True

    def list_rooms(self) -> List[Room]:
        return sorted(self._rooms.values(), key=lambda r: r.created_at)
