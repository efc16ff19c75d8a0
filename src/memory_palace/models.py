import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

MemoryKind = Literal["voice", "text", "conversation"]


def normalize_tags(tags: List[str]) -> List[str]:
    """Lower-case, strip and de-duplicate tags, keeping first-seen order."""
    seen: List[str] = []
    for tag in tags:
        clean = tag.strip().lower()
        if clean and clean not in seen:
            seen.append(clean)
    return seen


class Memory(BaseModel):
    """A single captured thought."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Stable memory ID")
    content: str = Field(..., min_length=1, description="Original transcribed or typed text")
    summary: Optional[str] = Field(default=None, description="Short AI-derived summary")
    kind: MemoryKind = "text"
    tags: List[str] = Field(default_factory=list, description="Lower-cased, unique topic tags")
    connections: List[str] = Field(
        default_factory=list, description="IDs of memories this one has been linked to"
    )
    room_id: Optional[str] = Field(
        default=None, description="Room this memory belongs to (may dangle after room deletion)"
    )
    user_id: str = "local"
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: List[str]) -> List[str]:
        return normalize_tags(value)

    @field_validator("connections")
    @classmethod
    def _unique_connections(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))


class Room(BaseModel):
    """A named category container in the memory palace."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    icon: str = "folder"
    color: str = "#6C3CE1"
    memory_count: int = Field(
        default=0, ge=0, description="Denormalized counter maintained by the memory store"
    )
    last_visited: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)


class MemoryConnection(BaseModel):
    """A discovered relationship between a new memory and an existing one."""

    memory_id: str
    relationship: str
    strength: float = Field(..., ge=0.0, le=1.0)
