"""
memory-palace: memory capture classification and insight surfacing.

Core components:
- classification: Tags, summary and room suggestion for captured text, plus connection finding
- conversation: Thinking-partner chat with recent memory context
- insights: Rule-based and LLM-assisted insight generators and the selection engine
- llm: Language model gateway protocol and casual-llm adapter
- storage: Protocol and in-memory implementation for memories and rooms
- models: Core data models (Memory, Room, MemoryConnection)
"""

__version__ = "0.1.0"

from memory_palace.models import Memory, MemoryConnection, Room
from memory_palace.palace_service import PalaceService

__all__ = [
    "__version__",
    # Models
    "Memory",
    "MemoryConnection",
    "Room",
    "PalaceService",
]
