"""
Unit tests for in-memory memory storage.

Tests memory and room CRUD, room counters, connection set semantics and
dangling room references.
"""

import pytest

from memory_palace.models import Memory, Room
from memory_palace.storage import InMemoryMemoryStore, MemoryStore


@pytest.fixture
def store():
    """Create a fresh in-memory store."""
    return InMemoryMemoryStore()


@pytest.fixture
def work_room(store, make_room):
    room = make_room("Work")
    store.add_room(room)
    return room


def test_add_and_get_memory(store, make_memory):
    memory = make_memory("Call the bank")

    memory_id = store.add_memory(memory)

    assert memory_id == memory.id
    assert store.get_memory(memory_id).content == "Call the bank"
    assert store.get_memory("nonexistent") is None


def test_add_duplicate_memory_rejected(store, make_memory):
    memory = make_memory()
    store.add_memory(memory)

    with pytest.raises(ValueError):
        store.add_memory(memory)


def test_list_memories_newest_first(store, make_memory):
    for days in (5, 1, 3):
        store.add_memory(make_memory(days_ago=days, id=f"d{days}"))

    assert [m.id for m in store.list_memories()] == ["d1", "d3", "d5"]


def test_room_counter_tracks_add_move_delete(store, work_room, make_room, make_memory):
    home = make_room("Home")
    store.add_room(home)
    memory = make_memory(room_id=work_room.id)

    store.add_memory(memory)
    assert store.get_room(work_room.id).memory_count == 1

    store.update_memory(memory.id, room_id=home.id)
    assert store.get_room(work_room.id).memory_count == 0
    assert store.get_room(home.id).memory_count == 1

    store.delete_memory(memory.id)
    assert store.get_room(home.id).memory_count == 0
    assert store.delete_memory(memory.id) is False


def test_update_memory_bumps_updated_at_and_normalizes_tags(store, make_memory):
    memory = make_memory(days_ago=3)
    store.add_memory(memory)

    updated = store.update_memory(memory.id, tags=["Books", "books", "Sci-Fi"], summary="A note")

    assert updated.tags == ["books", "sci-fi"]
    assert updated.summary == "A note"
    assert updated.updated_at > memory.updated_at
    assert updated.created_at == memory.created_at


@pytest.mark.parametrize("field", ["content", "id", "kind", "created_at"])
def test_update_memory_refuses_immutable_fields(store, make_memory, field):
    memory = make_memory()
    store.add_memory(memory)

    with pytest.raises(ValueError):
        store.update_memory(memory.id, **{field: "changed"})


def test_update_missing_memory_raises(store):
    with pytest.raises(KeyError):
        store.update_memory("missing", summary="x")


def test_add_connections_has_set_semantics(store, make_memory):
    a, b, c = make_memory(id="a"), make_memory(id="b"), make_memory(id="c")
    for memory in (a, b, c):
        store.add_memory(memory)

    store.add_connections("a", ["b", "b", "a", "ghost"])
    updated = store.add_connections("a", ["c", "b"])

    assert updated.connections == ["b", "c"]


def test_delete_room_keeps_memories_with_dangling_reference(store, work_room, make_memory):
    memory = make_memory(room_id=work_room.id)
    store.add_memory(memory)

    assert store.delete_room(work_room.id) is True

    assert store.get_room(work_room.id) is None
    assert store.get_memory(memory.id).room_id == work_room.id
    assert store.delete_room(work_room.id) is False


def test_add_room_counts_existing_members(store, make_memory):
    store.add_memory(make_memory(room_id="later"))

    store.add_room(Room(id="later", name="Later"))

    assert store.get_room("later").memory_count == 1


def test_query_memories(store, work_room, make_memory):
    store.add_memory(make_memory(room_id=work_room.id, tags=["budget"], id="w1"))
    store.add_memory(make_memory(tags=["budget"], id="n1"))
    store.add_memory(Memory(id="v1", content="Voice note", kind="voice", tags=["Budget"]))

    assert {m.id for m in store.query_memories(room_id=work_room.id)} == {"w1"}
    assert {m.id for m in store.query_memories(tag="BUDGET")} == {"w1", "n1", "v1"}
    assert {m.id for m in store.query_memories(kind="voice")} == {"v1"}
    assert store.query_memories(room_id=work_room.id, kind="voice") == []


def test_update_room(store, work_room):
    updated = store.update_room(work_room.id, name="Deep Work", color="#000000")

    assert updated.name == "Deep Work"
    with pytest.raises(ValueError):
        store.update_room(work_room.id, memory_count=10)
    with pytest.raises(KeyError):
        store.update_room("missing", name="x")


def test_satisfies_protocol(store):
    def takes_store(s: MemoryStore) -> int:
        return len(s.list_rooms())

    assert takes_store(store) == 0


def test_query_memories_by_text(store, make_memory):
    store.add_memory(make_memory("Plant GARLIC before the frost", id="content_hit"))
    store.add_memory(make_memory("Weekend chores", summary="Garlic and onions", id="summary_hit"))
    store.add_memory(make_memory("Groceries", tags=["garlicky-recipes"], id="tag_hit"))
    store.add_memory(make_memory("Call the bank", id="miss"))

    assert {m.id for m in store.query_memories(text="garlic")} == {"content_hit", "summary_hit", "tag_hit"}
    assert {m.id for m in store.query_memories(text="GaRl")} == {"content_hit", "summary_hit", "tag_hit"}
    assert store.query_memories(text="parsnip") == []


def test_query_memories_blank_text_matches_everything(store, make_memory):
    store.add_memory(make_memory(id="one"))
    store.add_memory(make_memory(id="two"))

    assert len(store.query_memories(text="   ")) == 2
    assert len(store.query_memories(text="")) == 2


def test_query_memories_text_combines_with_kind(store, make_memory):
    store.add_memory(make_memory("Garlic notes", id="text_note"))
    store.add_memory(Memory(id="voice_note", content="Garlic voice memo", kind="voice"))

    assert [m.id for m in store.query_memories(text="garlic", kind="voice")] == ["voice_note"]
