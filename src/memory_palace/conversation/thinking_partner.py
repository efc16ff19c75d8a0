"""
Thinking-partner chat over the language model gateway.

Each reply is generated with a system prompt that carries a short excerpt
of the user's most recent memories, so the model can point out links
between what is being said now and what was captured before.
"""

import logging
from typing import List

from memory_palace.conversation.prompts import (
    MEMORY_CONTEXT_PROMPT,
    THINKING_PARTNER_SYSTEM_PROMPT,
)
from memory_palace.llm import GatewayMessage, LanguageModelGateway
from memory_palace.models import Memory

logger = logging.getLogger(__name__)

MAX_CONTEXT_MEMORIES = 8
EXCERPT_LENGTH = 80


def build_thinking_partner_prompt(memories: List[Memory]) -> str:
    """
    Build the system prompt, optionally with recent memory context.

    Up to eight of the most recent memories are listed as
    ``- <first 80 characters> [tag, tag]``. With no memories the bare
    prompt is returned.
    """
    if not memories:
        return THINKING_PARTNER_SYSTEM_PROMPT

    recent = sorted(memories, key=lambda m: m.created_at, reverse=True)[:MAX_CONTEXT_MEMORIES]
    memory_lines = "\n".join(
        f"- {m.content[:EXCERPT_LENGTH]} [{', '.join(m.tags)}]" for m in recent
    )
    return THINKING_PARTNER_SYSTEM_PROMPT + MEMORY_CONTEXT_PROMPT.format(memory_lines=memory_lines)


class ThinkingPartner:
    """
    Multi-turn chat companion.

    Gateway errors propagate to the caller, which decides how to present
    them in the conversation.
    """

    def __init__(self, gateway: LanguageModelGateway):
        self.gateway = gateway
        self.reply_count = 0

        logger.info(f"ThinkingPartner initialized: configured={gateway.configured()}")

    def configured(self) -> bool:
        return self.gateway.configured()

    async def reply(self, history: List[GatewayMessage], memories: List[Memory]) -> str:
        """
        Answer the latest turn of a conversation.

        Args:
            history: Conversation so far, ending with the user's message
            memories: Memories available as context

        Returns:
            The assistant's reply text

        Raises:
            ValueError: If the history is empty
            GatewayError: If the completion fails
        """
        if not history:
            raise ValueError("Conversation history is empty")

        system_prompt = build_thinking_partner_prompt(memories)
        text = await self.gateway.complete(history, system_prompt=system_prompt)
        self.reply_count += 1

        logger.debug(f"Thinking partner replied after {len(history)} turns ({len(text)} chars)")
        return text

    def get_metrics(self) -> dict:
        return {"thinking_partner_reply_count": self.reply_count}
