"""
Data structures for memory classification.

Defines the classifier output and the tagged result of parsing an
untrusted language model reply:
- ClassificationResult: tags, summary and suggested room for new content
- ParsedAnalysis / MalformedAnalysis: outcome of parsing an analysis reply
"""

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ClassificationSource = Literal["llm", "heuristic"]


class AnalysisPayload(BaseModel):
    """Schema a memory analysis reply must satisfy."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tags: List[str] = Field(default_factory=list)
    summary: str = ""
    suggested_room: Optional[str] = Field(default=None, alias="suggestedRoom")


class ConnectionPayload(BaseModel):
    """Schema for one entry of a connection finding reply."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    memory_id: str = Field(..., alias="memoryId")
    relationship: str = ""
    strength: float = Field(..., ge=0.0, le=1.0)


@dataclass
class ParsedAnalysis:
    """The reply matched the analysis schema."""

    payload: AnalysisPayload


@dataclass
class MalformedAnalysis:
    """The reply could not be parsed; ``reason`` says why."""

    reason: str
    raw: str = ""


AnalysisParseResult = Union[ParsedAnalysis, MalformedAnalysis]


@dataclass
class ClassificationResult:
    """
    Result of classifying newly captured content.

    Attributes:
        tags: Lower-cased, unique topic tags (possibly empty)
        summary: Short summary of the content
        suggested_room_id: ID of an existing room whose name matched the
            suggested category, or None
        source: "llm" when the language model analysis was used,
            "heuristic" for the keyword fallback
    """

    tags: List[str] = field(default_factory=list)
    summary: str = ""
    suggested_room_id: Optional[str] = None
    source: ClassificationSource = "heuristic"
