"""
Surprise Me Demo

Captures a handful of memories into an in-memory palace and prints a batch
of insights. Uses the language model from MEMORY_PALACE_* settings when one
is configured, and the heuristics otherwise.
"""

import asyncio
import logging

from dotenv import load_dotenv

from memory_palace import PalaceService
from memory_palace.classification import ConnectionFinder, MemoryClassifier
from memory_palace.conversation import ThinkingPartner
from memory_palace.config import PalaceSettings, create_gateway
from memory_palace.insights import InsightSelectionEngine
from memory_palace.models import Room
from memory_palace.storage import InMemoryMemoryStore

load_dotenv()


async def main():
    print("=== Memory Palace Surprise Demo ===\n")
    logging.basicConfig(level=logging.INFO)

    settings = PalaceSettings()
    gateway = create_gateway(settings)

    store = InMemoryMemoryStore()
    store.add_room(Room(id="outdoors", name="Outdoors", icon="leaf", color="#4ade80"))
    store.add_room(Room(id="work", name="Work", icon="briefcase", color="#60a5fa"))

    service = PalaceService(
        store=store,
        classifier=MemoryClassifier(gateway),
        engine=InsightSelectionEngine(gateway),
        connection_finder=ConnectionFinder(gateway),
        thinking_partner=ThinkingPartner(gateway),
    )

    for text in [
        "I love hiking on weekends near the lake",
        "Draft the quarterly planning doc for work",
        "Try the new coffee place by the lake trail",
        "Podcast idea: the history of city maps",
    ]:
        memory = await service.capture(text)
        print(f"Captured: {memory.content}")
        print(f"  tags={memory.tags} room={memory.room_id} connections={memory.connections}")

    print("\n--- Talk ---")
    memory, reply = await service.talk("What should I do with my free weekend?")
    print(f"You: {memory.content}")
    print(f"Vibot: {reply}")

    print("\n--- Surprise Me ---")
    for insight in await service.surprise(count=settings.insight_count):
        print(f"[{insight.kind}] {insight.title}")
        print(f"  {insight.body}\n")


if __name__ == "__main__":
    asyncio.run(main())
