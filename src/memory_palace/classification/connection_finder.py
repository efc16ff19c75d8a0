"""
Connection discovery between a new memory and existing ones.

Asks the language model which recent memories relate to new content and
falls back to keyword overlap when the model is unavailable or replies
with something unusable.
"""

import logging
from typing import List

from memory_palace.classification.parsing import parse_connections
from memory_palace.classification.prompts import (
    CONNECTION_FINDING_SYSTEM_PROMPT,
    CONNECTION_FINDING_USER_PROMPT,
)
from memory_palace.llm import GatewayMessage, LanguageModelGateway
from memory_palace.models import Memory, MemoryConnection
from memory_palace.utils.text import jaccard, keyword_set

logger = logging.getLogger(__name__)

MAX_CANDIDATES = 20
MAX_CONNECTIONS = 5
MIN_STRENGTH = 0.3


class ConnectionFinder:
    """
    Finds existing memories related to new content.

    Only the 20 most recent memories are considered. Results are capped at
    five, strongest first, and every returned ID refers to a candidate.
    """

    def __init__(self, gateway: LanguageModelGateway):
        self.gateway = gateway
        self.heuristic_fallback_count = 0

        logger.info(f"ConnectionFinder initialized: llm_configured={gateway.configured()}")

    async def find_connections(
        self, content: str, existing: List[Memory]
    ) -> List[MemoryConnection]:
        """
        Find connections for new content.

        Args:
            content: Text of the new memory
            existing: Existing memories to link against

        Returns:
            Up to five connections with strength above 0.3
        """
        if not existing:
            return []

        candidates = sorted(existing, key=lambda m: m.created_at, reverse=True)[:MAX_CANDIDATES]

        if self.gateway.configured():
            try:
                return await self._find_with_llm(content, candidates)
            except Exception as e:
                logger.warning(f"LLM connection finding failed: {e}. Using keyword overlap")

        self.heuristic_fallback_count += 1
        return self._find_with_overlap(content, candidates)

    async def _find_with_llm(
        self, content: str, candidates: List[Memory]
    ) -> List[MemoryConnection]:
        memory_list = "\n".join(
            f"[{m.id}] {m.summary or m.content[:100]}" for m in candidates
        )
        reply = await self.gateway.complete(
            [
                GatewayMessage(
                    role="user",
                    text=CONNECTION_FINDING_USER_PROMPT.format(
                        content=content, memory_list=memory_list
                    ),
                )
            ],
            system_prompt=CONNECTION_FINDING_SYSTEM_PROMPT,
        )

        known_ids = {m.id for m in candidates}
        best: dict = {}
        for entry in parse_connections(reply):
            if entry.memory_id not in known_ids:
                logger.debug(f"Ignoring connection to unknown memory {entry.memory_id}")
                continue
            if entry.strength <= MIN_STRENGTH:
                continue
            current = best.get(entry.memory_id)
            if current is None or entry.strength > current.strength:
                best[entry.memory_id] = MemoryConnection(
                    memory_id=entry.memory_id,
                    relationship=entry.relationship,
                    strength=entry.strength,
                )

        connections = sorted(best.values(), key=lambda c: c.strength, reverse=True)
        logger.info(f"LLM found {len(connections[:MAX_CONNECTIONS])} connections")
        return connections[:MAX_CONNECTIONS]

    def _find_with_overlap(
        self, content: str, candidates: List[Memory]
    ) -> List[MemoryConnection]:
        words = keyword_set(content)
        connections = []
        for memory in candidates:
            other = keyword_set(memory.content) | set(memory.tags)
            strength = jaccard(words, other)
            if strength > MIN_STRENGTH:
                shared = sorted(words & other)
                connections.append(
                    MemoryConnection(
                        memory_id=memory.id,
                        relationship=f"Shares {', '.join(shared[:3])}",
                        strength=round(strength, 3),
                    )
                )

        connections.sort(key=lambda c: c.strength, reverse=True)
        logger.debug(f"Keyword overlap found {len(connections)} connections")
        return connections[:MAX_CONNECTIONS]
