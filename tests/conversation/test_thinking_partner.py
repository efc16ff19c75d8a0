"""Unit tests for the thinking-partner chat."""

import pytest

from memory_palace.conversation import ThinkingPartner, build_thinking_partner_prompt
from memory_palace.conversation.prompts import THINKING_PARTNER_SYSTEM_PROMPT
from memory_palace.llm import GatewayMessage, GatewayRequestError


def context_lines(prompt):
    return [line for line in prompt.splitlines() if line.startswith("- ")]


def test_prompt_without_memories_has_no_context():
    prompt = build_thinking_partner_prompt([])

    assert prompt == THINKING_PARTNER_SYSTEM_PROMPT
    assert "recent memories" not in prompt


def test_prompt_lists_at_most_eight_recent_memories(make_memory):
    memories = [make_memory(f"Thought number {i}", days_ago=i, tags=["t"], id=f"m{i}") for i in range(12)]

    prompt = build_thinking_partner_prompt(memories)

    lines = context_lines(prompt)
    assert len(lines) == 8
    assert lines[0] == "- Thought number 0 [t]"
    assert "Thought number 8" not in prompt
    assert prompt.startswith(THINKING_PARTNER_SYSTEM_PROMPT)


def test_prompt_uses_newest_memories_regardless_of_input_order(make_memory):
    memories = [make_memory(f"Day {i}", days_ago=i) for i in reversed(range(10))]

    lines = context_lines(build_thinking_partner_prompt(memories))

    assert lines[0] == "- Day 0 []"
    assert lines[-1] == "- Day 7 []"


def test_prompt_excerpts_are_eighty_characters(make_memory):
    long_text = "x" * 79 + "yz" + "w" * 50
    memory = make_memory(long_text, tags=["design", "ideas"])

    (line,) = context_lines(build_thinking_partner_prompt([memory]))

    assert line == f"- {'x' * 79}y [design, ideas]"


@pytest.mark.asyncio
async def test_reply_sends_history_with_memory_prompt(make_gateway, make_memory):
    gateway = make_gateway(replies=["That links to your garden notes!"])
    partner = ThinkingPartner(gateway)
    history = [
        GatewayMessage("user", "I want to grow tomatoes"),
        GatewayMessage("assistant", "What got you started?"),
        GatewayMessage("user", "My balcony gets lots of sun"),
    ]
    memories = [make_memory("Plant garlic before the frost", tags=["garden"])]

    reply = await partner.reply(history, memories)

    assert reply == "That links to your garden notes!"
    messages, system_prompt = gateway.calls[0]
    assert messages == history
    assert "- Plant garlic before the frost [garden]" in system_prompt
    assert partner.get_metrics()["thinking_partner_reply_count"] == 1


@pytest.mark.asyncio
async def test_reply_requires_history(gateway):
    with pytest.raises(ValueError):
        await ThinkingPartner(gateway).reply([], [])


@pytest.mark.asyncio
async def test_reply_propagates_gateway_errors(make_gateway):
    partner = ThinkingPartner(make_gateway(replies=[GatewayRequestError("503")]))

    with pytest.raises(GatewayRequestError):
        await partner.reply([GatewayMessage("user", "Hello")], [])

    assert partner.get_metrics()["thinking_partner_reply_count"] == 0


def test_configured_follows_gateway(gateway, unconfigured_gateway):
    assert ThinkingPartner(gateway).configured() is True
    assert ThinkingPartner(unconfigured_gateway).configured() is False
