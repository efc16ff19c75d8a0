"""
Memory classification for memory-palace.

Turns captured text into tags, a summary and a suggested room, and links
new memories to related existing ones. Both components use the language
model gateway when available and keyword heuristics otherwise.
"""

from memory_palace.classification.classifier import (
    MemoryClassifier,
    heuristic_classification,
    resolve_room,
)
from memory_palace.classification.connection_finder import ConnectionFinder
from memory_palace.classification.models import (
    AnalysisParseResult,
    AnalysisPayload,
    ClassificationResult,
    MalformedAnalysis,
    ParsedAnalysis,
)
from memory_palace.classification.parsing import parse_analysis, parse_connections

__all__ = [
    # Data structures
    "AnalysisParseResult",
    "AnalysisPayload",
    "ClassificationResult",
    "MalformedAnalysis",
    "ParsedAnalysis",
    # Parsing
    "parse_analysis",
    "parse_connections",
    # Components
    "ConnectionFinder",
    "MemoryClassifier",
    "heuristic_classification",
    "resolve_room",
]
