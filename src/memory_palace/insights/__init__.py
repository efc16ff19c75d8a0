"""
Insight ("surprise") generation for memory-palace.

Provides the generator registry (six rule-based generators and two
LLM-assisted ones) and the selection engine that turns a memory snapshot
into a small, varied batch of insights.
"""

from memory_palace.insights.ai_generators import (
    AIConnectionGenerator,
    AIIdeaSparkGenerator,
    ai_generators,
)
from memory_palace.insights.engine import InsightSelectionEngine
from memory_palace.insights.generators import (
    ForgottenGemGenerator,
    MashupGenerator,
    NudgeGenerator,
    OnThisDayGenerator,
    PatternGenerator,
    QuestionGenerator,
    rule_based_generators,
)
from memory_palace.insights.models import (
    AI_INSIGHT_KINDS,
    INSIGHT_STYLES,
    Failed,
    Found,
    GenerationContext,
    GeneratorOutcome,
    Insight,
    InsightKind,
    InsightStyle,
    NotApplicable,
    make_insight,
)

__all__ = [
    # Data structures
    "AI_INSIGHT_KINDS",
    "INSIGHT_STYLES",
    "Failed",
    "Found",
    "GenerationContext",
    "GeneratorOutcome",
    "Insight",
    "InsightKind",
    "InsightStyle",
    "NotApplicable",
    "make_insight",
    # Engine
    "InsightSelectionEngine",
    # Generators
    "AIConnectionGenerator",
    "AIIdeaSparkGenerator",
    "ForgottenGemGenerator",
    "MashupGenerator",
    "NudgeGenerator",
    "OnThisDayGenerator",
    "PatternGenerator",
    "QuestionGenerator",
    "ai_generators",
    "rule_based_generators",
]
