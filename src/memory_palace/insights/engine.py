"""
Insight selection engine.

Picks a small, varied batch of insights for one home screen visit by
running the generator registry in random order until enough insights
are found. Never returns an empty batch and never lets a generator fault
escape to the caller.
"""

import inspect
import logging
import random
from datetime import datetime
from typing import Callable, List, Optional

from memory_palace.insights.ai_generators import ai_generators
from memory_palace.insights.generators import rule_based_generators
from memory_palace.insights.models import (
    Failed,
    Found,
    GenerationContext,
    GeneratorOutcome,
    Insight,
    NotApplicable,
    make_insight,
)
from memory_palace.llm import LanguageModelGateway
from memory_palace.models import Memory, Room

logger = logging.getLogger(__name__)

WELCOME_TITLE = "Welcome to Your Memory Palace"
WELCOME_BODY = (
    "Start by talking to me about anything - an idea, a thought, a dream. "
    "I'll remember everything and surprise you with connections you never expected."
)

ENCOURAGEMENT_TITLE = "Keep Talking"
ENCOURAGEMENT_TEMPLATES = [
    "You've captured {count} memories so far. Each one is a piece of your thinking. Keep going!",
    "Your memory palace is growing. The more you add, the more surprising connections I can find.",
    "Talk to me about what's on your mind - I'll remember it and surprise you with insights later.",
]


class InsightSelectionEngine:
    """
    Selects insights from the generator registry.

    Selection cycle:
    1. No memories: a single welcome insight
    2. Candidates: six rule-based generators, plus two AI generators when
       the gateway is configured
    3. Uniform shuffle, so no generator has positional priority
    4. Sequential invocation until ``count`` insights are accepted; faults
       are logged and skipped
    5. Nothing accepted: one encouragement insight
    """

    def __init__(
        self,
        gateway: LanguageModelGateway,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the selection engine.

        Args:
            gateway: Language model gateway for the AI generators
            rng: Randomness source for the shuffle and every random pick
                 (default: an unseeded random.Random)
            clock: Returns "now" for date math (default: datetime.now)
        """
        self.gateway = gateway
        self.rng = rng or random.Random()
        self.clock = clock or datetime.now
        self.selection_count = 0
        self.generator_attempt_count = 0
        self.generator_failure_count = 0
        self.integrity_violation_count = 0
        self.fallback_count = 0

        logger.info(f"InsightSelectionEngine initialized: llm_configured={gateway.configured()}")

    def candidate_generators(self) -> list:
        generators = rule_based_generators()
        if self.gateway.configured():
            generators.extend(ai_generators(self.gateway))
        return generators

    async def select_insights(
        self, memories: List[Memory], rooms: List[Room], count: int = 3
    ) -> List[Insight]:
        """
        Select a batch of insights for one presentation cycle.

        Args:
            memories: Snapshot of the user's memories (read-only)
            rooms: Snapshot of the user's rooms (read-only)
            count: Maximum number of insights to return (values below 1 act as 1)

        Returns:
            Between 1 and ``count`` insights, in the order they were accepted
        """
        self.selection_count += 1
        count = max(1, count)

        if not memories:
            logger.info("No memories yet, returning welcome insight")
            return [make_insight("welcome", title=WELCOME_TITLE, body=WELCOME_BODY)]

        ctx = GenerationContext(
            memories=list(memories), rooms=list(rooms), now=self.clock(), rng=self.rng
        )

        generators = self.candidate_generators()
        self.rng.shuffle(generators)

        insights: List[Insight] = []
        for generator in generators:
            if len(insights) >= count:
                break

            outcome = await self._invoke(generator, ctx)

            if isinstance(outcome, Found):
                insights.append(outcome.insight)
            elif isinstance(outcome, Failed):
                self.generator_failure_count += 1
                logger.warning(f"Insight generator {generator.kind} failed: {outcome.cause}")
            else:
                logger.debug(f"Insight generator {generator.kind} skipped: {outcome.reason}")

        if not insights:
            self.fallback_count += 1
            insights.append(self._encouragement(len(memories)))

        logger.info(
            f"Selected {len(insights)} insights "
            f"({', '.join(i.kind for i in insights)}) from {len(generators)} candidates"
        )
        return insights

    async def _invoke(self, generator, ctx: GenerationContext) -> GeneratorOutcome:
        """Run one generator, converting faults and dangling references into outcomes."""
        self.generator_attempt_count += 1
        try:
            outcome = generator.generate(ctx)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as e:
            logger.error(f"Insight generator {generator.kind} raised: {e}", exc_info=True)
            return Failed(cause=e)

        if outcome is None:
            return NotApplicable("generator returned nothing")

        if isinstance(outcome, Found):
            dangling = [i for i in outcome.insight.related_memory_ids if i not in ctx.memory_ids]
            if dangling:
                self.integrity_violation_count += 1
                logger.error(
                    f"Insight generator {generator.kind} referenced unknown memories "
                    f"{dangling}, discarding insight"
                )
                return Failed(
                    cause=LookupError(f"unknown memory ids: {dangling}"),
                    details={"dangling": dangling},
                )

        return outcome

    def _encouragement(self, memory_count: int) -> Insight:
        template = ENCOURAGEMENT_TEMPLATES[memory_count % len(ENCOURAGEMENT_TEMPLATES)]
        return make_insight(
            "encouragement",
            title=ENCOURAGEMENT_TITLE,
            body=template.format(count=memory_count),
        )

    def get_metrics(self) -> dict:
        """
        Get metrics from the engine.

        Returns:
            Dictionary with selection and generator counters
        """
        return {
            "selection_count": self.selection_count,
            "generator_attempt_count": self.generator_attempt_count,
            "generator_failure_count": self.generator_failure_count,
            "integrity_violation_count": self.integrity_violation_count,
            "fallback_count": self.fallback_count,
            "generators": [g.kind for g in self.candidate_generators()],
        }
