from memory_palace.classification import ConnectionFinder, MemoryClassifier
from memory_palace.conversation import ThinkingPartner
from memory_palace.insights import Insight, InsightSelectionEngine
from memory_palace.llm import GatewayError, GatewayMessage
from memory_palace.models import Memory, MemoryKind
from memory_palace.storage import MemoryStore
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

TROUBLE_CONNECTING_REPLY = "I'm having trouble connecting right now. {error}"


class PalaceService:
    def __init__(
        self,
        store: MemoryStore,
        classifier: MemoryClassifier,
        engine: InsightSelectionEngine,
        connection_finder: Optional[ConnectionFinder] = None,
        thinking_partner: Optional[ThinkingPartner] = None,
    ):
        self.store = store
        self.classifier = classifier
        self.engine = engine
        self.connection_finder = connection_finder
        self.thinking_partner = thinking_partner


    async def capture(self, content: str, kind: MemoryKind = "text") -> Memory:
        if not content or not content.strip():
            raise ValueError("Cannot capture empty content")

        existing = self.store.list_memories()
        classification = await self.classifier.classify(content, self.store.list_rooms())

        memory = Memory(
            content=content,
            summary=classification.summary or None,
            kind=kind,
            tags=classification.tags,
            room_id=classification.suggested_room_id,
        )
        self.store.add_memory(memory)

        if self.connection_finder is not None and existing:
            connections = await self.connection_finder.find_connections(content, existing)
            if connections:
                memory = self.store.add_connections(
                    memory.id, [c.memory_id for c in connections]
                )

        logger.info(
            f"Captured memory {memory.id}: source={classification.source}, "
            f"tags={memory.tags}, room={memory.room_id}, "
            f"connections={len(memory.connections)}"
        )
        return memory


    async def talk(
        self,
        message: str,
        history: Optional[List[GatewayMessage]] = None,
        kind: MemoryKind = "conversation",
    ) -> Tuple[Memory, str]:
        """
        Send one message to the thinking partner.

        The message is captured as a memory, and the reply is generated with
        the memories that existed before it as context. A failed completion
        becomes an apology reply instead of an error.

        Returns:
            The captured memory and the assistant's reply
        """
        if self.thinking_partner is None:
            raise RuntimeError("PalaceService was created without a thinking partner")
        if not message or not message.strip():
            raise ValueError("Cannot send an empty message")

        context = self.store.list_memories()
        memory = await self.capture(message.strip(), kind=kind)

        turns = list(history or []) + [GatewayMessage(role="user", text=message.strip())]
        try:
            reply = await self.thinking_partner.reply(turns, context)
        except GatewayError as e:
            logger.warning(f"Thinking partner unavailable: {e}")
            reply = TROUBLE_CONNECTING_REPLY.format(error=e)

        return memory, reply


    async def surprise(self, count: int = 3) -> List[Insight]:
        return await self.engine.select_insights(
            self.store.list_memories(), self.store.list_rooms(), count=count
        )
