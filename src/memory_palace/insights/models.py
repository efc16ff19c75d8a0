"""
Data structures for insight generation.

Defines the insight model shown on the home screen, the static style
table per insight kind, the snapshot handed to every generator, and the
tagged outcome a generator returns:
- Found: the generator produced an insight
- NotApplicable: nothing interesting for this snapshot
- Failed: the generator hit a fault (usually the language model)
"""

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

from memory_palace.models import Memory, Room

InsightKind = Literal[
    "on_this_day",
    "forgotten_gem",
    "pattern",
    "nudge",
    "mashup",
    "question",
    "connection",
    "idea_spark",
    "welcome",
    "encouragement",
]

AI_INSIGHT_KINDS: FrozenSet[str] = frozenset({"connection", "idea_spark"})


@dataclass(frozen=True)
class InsightStyle:
    icon: str
    gradient: Tuple[str, str]


INSIGHT_STYLES: Dict[str, InsightStyle] = {
    "on_this_day": InsightStyle("calendar", ("#6C3CE1", "#8B5CF6")),
    "connection": InsightStyle("git-merge", ("#3B82F6", "#06B6D4")),
    "idea_spark": InsightStyle("flash", ("#F59E0B", "#EF4444")),
    "forgotten_gem": InsightStyle("diamond", ("#EC4899", "#8B5CF6")),
    "pattern": InsightStyle("analytics", ("#10B981", "#3B82F6")),
    "nudge": InsightStyle("hand-left", ("#F59E0B", "#10B981")),
    "mashup": InsightStyle("shuffle", ("#EF4444", "#6C3CE1")),
    "question": InsightStyle("help-circle", ("#06B6D4", "#3B82F6")),
    "welcome": InsightStyle("sparkles", ("#6C3CE1", "#EC4899")),
    "encouragement": InsightStyle("chatbubbles", ("#10B981", "#06B6D4")),
}


class Insight(BaseModel):
    """An ephemeral highlight generated for one presentation cycle."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Fresh per occurrence")
    kind: InsightKind
    title: str
    body: str
    related_memory_ids: List[str] = Field(default_factory=list)
    icon: str
    gradient: Tuple[str, str]
    created_at: datetime = Field(default_factory=datetime.now)


def make_insight(
    kind: InsightKind, title: str, body: str, related_memory_ids: Optional[List[str]] = None
) -> Insight:
    """Build an insight decorated with the style for its kind."""
    style = INSIGHT_STYLES[kind]
    return Insight(
        kind=kind,
        title=title,
        body=body,
        related_memory_ids=list(related_memory_ids or []),
        icon=style.icon,
        gradient=style.gradient,
    )


@dataclass
class GenerationContext:
    """
    Read-only snapshot handed to every generator in one selection cycle.

    Attributes:
        memories: Memories, in any order
        rooms: Rooms, possibly empty
        now: Reference time for all date math
        rng: Randomness source for every random pick
    """

    memories: List[Memory]
    rooms: List[Room]
    now: datetime
    rng: random.Random
    room_ids: FrozenSet[str] = field(init=False)
    memory_ids: FrozenSet[str] = field(init=False)

    def __post_init__(self):
        self.room_ids = frozenset(room.id for room in self.rooms)
        self.memory_ids = frozenset(memory.id for memory in self.memories)

    def most_recent(self, limit: Optional[int] = None) -> List[Memory]:
        """Memories sorted newest first, optionally capped."""
        ordered = sorted(self.memories, key=lambda m: m.created_at, reverse=True)
        return ordered if limit is None else ordered[:limit]

    def shuffled(self) -> List[Memory]:
        memories = list(self.memories)
        self.rng.shuffle(memories)
        return memories

    def effective_room(self, memory: Memory) -> Optional[str]:
        """Room ID of a memory, or None when unset or dangling."""
        return memory.room_id if memory.room_id in self.room_ids else None


@dataclass
class Found:
    insight: Insight


@dataclass
class NotApplicable:
    reason: str = ""


@dataclass
class Failed:
    cause: BaseException
    details: dict = field(default_factory=dict)


GeneratorOutcome = Union[Found, NotApplicable, Failed]
