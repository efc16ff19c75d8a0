"""
LLM-assisted insight generators.

Both generators make exactly one gateway call when their preconditions
hold. Gateway errors propagate to the selection engine, which treats them
as a skip for this cycle.

Performance: one completion (~1-5s) per generator invocation
"""

import logging

from memory_palace.insights.generators import pick_partner
from memory_palace.insights.models import (
    Found,
    GenerationContext,
    GeneratorOutcome,
    NotApplicable,
    make_insight,
)
from memory_palace.insights.prompts import (
    CONNECTION_SYSTEM_PROMPT,
    CONNECTION_USER_PROMPT,
    IDEA_SPARK_SYSTEM_PROMPT,
    IDEA_SPARK_USER_PROMPT,
)
from memory_palace.llm import GatewayMessage, LanguageModelGateway

logger = logging.getLogger(__name__)

MAX_REPLY_LENGTH = 200
MAX_EXCERPT_LENGTH = 200


class AIConnectionGenerator:
    """Ask the language model for a surprising link between two unrelated memories."""

    kind = "connection"
    requires_llm = True
    min_memories = 3

    def __init__(self, gateway: LanguageModelGateway):
        self.gateway = gateway

    async def generate(self, ctx: GenerationContext) -> GeneratorOutcome:
        if len(ctx.memories) < self.min_memories:
            return NotApplicable(f"fewer than {self.min_memories} memories")

        shuffled = ctx.shuffled()
        anchor = shuffled[0]
        partner = pick_partner(anchor, shuffled, ctx)
        if partner is None:
            return NotApplicable("no partner memory")

        reply = await self.gateway.complete(
            [
                GatewayMessage(
                    role="user",
                    text=CONNECTION_USER_PROMPT.format(
                        memory_a=anchor.content[:MAX_EXCERPT_LENGTH],
                        memory_b=partner.content[:MAX_EXCERPT_LENGTH],
                    ),
                )
            ],
            system_prompt=CONNECTION_SYSTEM_PROMPT,
        )

        logger.debug(f"Connection between {anchor.id} and {partner.id}: {reply[:50]}...")
        return Found(
            make_insight(
                "connection",
                title="Hidden Connection",
                body=reply[:MAX_REPLY_LENGTH],
                related_memory_ids=[anchor.id, partner.id],
            )
        )


class AIIdeaSparkGenerator:
    """Ask the language model for one actionable idea built on recent topics."""

    kind = "idea_spark"
    requires_llm = True
    min_memories = 2
    window = 10
    max_topics = 5

    def __init__(self, gateway: LanguageModelGateway):
        self.gateway = gateway

    async def generate(self, ctx: GenerationContext) -> GeneratorOutcome:
        if len(ctx.memories) < self.min_memories:
            return NotApplicable(f"fewer than {self.min_memories} memories")

        recent = ctx.most_recent(self.window)
        topics = list(dict.fromkeys(tag for m in recent for tag in m.tags))[: self.max_topics]
        if not topics:
            return NotApplicable("no recent topics")

        reply = await self.gateway.complete(
            [GatewayMessage(role="user", text=IDEA_SPARK_USER_PROMPT.format(topics=", ".join(topics)))],
            system_prompt=IDEA_SPARK_SYSTEM_PROMPT,
        )

        return Found(
            make_insight(
                "idea_spark",
                title="Idea Spark",
                body=reply[:MAX_REPLY_LENGTH],
                related_memory_ids=[m.id for m in recent[:2]],
            )
        )


def ai_generators(gateway: LanguageModelGateway) -> list:
    """The two generators that need a configured language model."""
    return [AIConnectionGenerator(gateway), AIIdeaSparkGenerator(gateway)]
