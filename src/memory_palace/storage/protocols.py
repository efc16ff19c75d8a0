"""
Storage protocol definitions for memories and rooms.

These protocols define the interface that storage implementations must provide.
They are implementation-agnostic; the insight engine and classifier never call
them directly and only receive snapshots produced by ``list_memories`` and
``list_rooms``.
"""

from typing import List, Optional, Protocol

from memory_palace.models import Memory, Room


class MemoryStore(Protocol):
    """
    Protocol for memory and room storage.

    Implementations own the denormalized ``Room.memory_count`` counter and
    must keep memories alive when their room is deleted.
    """

    def add_memory(self, memory: Memory) -> str:
        """
        Add a memory to the store.

        Args:
            memory: The memory to add

        Returns:
            The memory ID
        """
        ...

    def get_memory(self, memory_id: str) -> Optional[Memory]:
        """
        Retrieve a memory by ID.

        Returns:
            The memory if found, None otherwise
        """
        ...

    def update_memory(self, memory_id: str, **updates) -> Memory:
        """
        Update mutable fields of a memory and bump ``updated_at``.

        Args:
            memory_id: The ID of the memory to update
            **updates: Field values (summary, tags, room_id, connections)

        Returns:
            The updated memory

        Raises:
            KeyError: If the memory doesn't exist
            ValueError: If an immutable field is updated
        """
        ...

    def delete_memory(self, memory_id: str) -> bool:
        """
        Delete a memory.

        Returns:
            True if deleted, False if not found
        """
        ...

    def list_memories(self) -> List[Memory]:
        """
        Snapshot of all memories, newest first.
        """
        ...

    def query_memories(
        self,
        room_id: Optional[str] = None,
        tag: Optional[str] = None,
        kind: Optional[str] = None,
        text: Optional[str] = None,
    ) -> List[Memory]:
        """
        Memories matching every given filter, newest first.

        Args:
            room_id: Only memories filed in this room
            tag: Only memories carrying this tag (case-insensitive)
            kind: Only memories of this kind
            text: Case-insensitive substring of the content, summary or a tag;
                  blank text matches everything
        """
        ...

    def add_connections(self, memory_id: str, connection_ids: List[str]) -> Memory:
        """
        Link a memory to other memories.

        Self-links, unknown IDs and existing links are ignored.

        Returns:
            The updated memory

        Raises:
            KeyError: If the memory doesn't exist
        """
        ...

    def add_room(self, room: Room) -> str:
        """
        Add a room.

        Returns:
            The room ID
        """
        ...

    def get_room(self, room_id: str) -> Optional[Room]:
        ...

    def update_room(self, room_id: str, **updates) -> Room:
        ...

    def delete_room(self, room_id: str) -> bool:
        """
        Delete a room without touching its memories.

        Returns:
            True if deleted, False if not found
        """
        ...

    def list_rooms(self) -> List[Room]:
        ...
