"""
Unit tests for MemoryClassifier.

Tests the LLM analysis path and every fallback to the keyword heuristic:
- Gateway not configured
- Gateway errors
- Malformed or schema-violating replies
- Room suggestion resolution
"""

import json

import pytest

from memory_palace.classification.classifier import (
    MemoryClassifier,
    heuristic_classification,
    resolve_room,
)


@pytest.fixture
def rooms(make_room):
    return [
        make_room("Work & Projects", id="room_work"),
        make_room("Ideas Lab", id="room_ideas"),
        make_room("Personal Learning", id="room_learning"),
    ]


def analysis_reply(tags, summary="A summary.", room=None):
    payload = {"tags": tags, "summary": summary}
    if room is not None:
        payload["suggestedRoom"] = room
    return json.dumps(payload)


@pytest.mark.asyncio
async def test_heuristic_used_when_not_configured(unconfigured_gateway):
    """Scenario: no gateway credentials -> keyword tags and truncated content."""
    classifier = MemoryClassifier(unconfigured_gateway)

    result = await classifier.classify("I love hiking on weekends near the lake", [])

    assert set(result.tags) <= {"hiking", "weekends", "near", "lake"}
    assert result.tags == ["hiking", "weekends", "near", "lake"]
    assert result.summary == "I love hiking on weekends near the lake"
    assert result.suggested_room_id is None
    assert result.source == "heuristic"
    assert unconfigured_gateway.calls == []


@pytest.mark.asyncio
async def test_llm_analysis_used_when_configured(make_gateway, rooms):
    gateway = make_gateway(
        replies=[analysis_reply(["Startup", "fundraising", "pitch deck"], "Planning the seed round.", "work")]
    )
    classifier = MemoryClassifier(gateway)

    result = await classifier.classify("Need to finish the pitch deck before the seed round", rooms)

    assert result.source == "llm"
    assert result.tags == ["startup", "fundraising", "pitch deck"]
    assert result.summary == "Planning the seed round."
    assert result.suggested_room_id == "room_work"

    messages, system_prompt = gateway.calls[0]
    assert "JSON" in system_prompt
    assert messages[0].role == "user"
    assert "pitch deck" in messages[0].text


@pytest.mark.asyncio
async def test_llm_tags_are_deduplicated_case_insensitively_and_capped(make_gateway):
    gateway = make_gateway(
        replies=[analysis_reply(["AI", "ai", " Ai ", "robots", "Robots", "ethics", "law", "future", "jobs"])]
    )
    classifier = MemoryClassifier(gateway)

    result = await classifier.classify("Thoughts on AI and robots", [])

    assert result.tags == ["ai", "robots", "ethics", "law", "future"]
    assert len(result.tags) == len({t.lower() for t in result.tags})


@pytest.mark.asyncio
async def test_code_fenced_json_is_accepted(make_gateway):
    gateway = make_gateway(replies=["```json\n" + analysis_reply(["music"]) + "\n```"])
    classifier = MemoryClassifier(gateway)

    result = await classifier.classify("Learning the piano again", [])

    assert result.source == "llm"
    assert result.tags == ["music"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        "Sure! Here are the tags: music, piano",
        "[1, 2, 3]",
        '{"tags": "music", "summary": 5}',
        "{not json",
    ],
)
async def test_malformed_reply_falls_back_to_heuristic(make_gateway, reply):
    gateway = make_gateway(replies=[reply])
    classifier = MemoryClassifier(gateway)

    result = await classifier.classify("Practising piano scales every morning", [])

    assert result.source == "heuristic"
    assert isinstance(result.tags, list)
    assert isinstance(result.summary, str)
    assert result.suggested_room_id is None
    assert classifier.get_metrics()["classifier_heuristic_fallback_count"] == 1


@pytest.mark.asyncio
async def test_gateway_error_falls_back_to_heuristic(failing_gateway):
    classifier = MemoryClassifier(failing_gateway)

    result = await classifier.classify("Practising piano scales every morning", [])

    assert result.source == "heuristic"
    assert "piano" in result.tags
    metrics = classifier.get_metrics()
    assert metrics["classifier_llm_failure_count"] == 1
    assert metrics["classifier_llm_success_rate_percent"] == 0.0


@pytest.mark.asyncio
async def test_unexpected_exception_falls_back_to_heuristic(make_gateway):
    gateway = make_gateway(replies=[RuntimeError("boom")])
    classifier = MemoryClassifier(gateway)

    result = await classifier.classify("Something odd happened at the museum", [])

    assert result.source == "heuristic"


@pytest.mark.asyncio
async def test_empty_summary_from_llm_uses_content_prefix(make_gateway):
    gateway = make_gateway(replies=[analysis_reply(["travel"], summary="  ")])
    classifier = MemoryClassifier(gateway)

    result = await classifier.classify("Booked flights to Lisbon", [])

    assert result.summary == "Booked flights to Lisbon"


@pytest.mark.asyncio
async def test_unmatched_room_suggestion_leaves_memory_roomless(make_gateway, rooms):
    gateway = make_gateway(replies=[analysis_reply(["cooking"], room="Kitchen Experiments")])
    classifier = MemoryClassifier(gateway)

    result = await classifier.classify("Tried a new curry recipe", rooms)

    assert result.suggested_room_id is None


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   ", "\n"])
async def test_blank_content_is_rejected(unconfigured_gateway, content):
    classifier = MemoryClassifier(unconfigured_gateway)

    with pytest.raises(ValueError):
        await classifier.classify(content, [])


def test_heuristic_summary_is_truncated_with_ellipsis():
    content = "word " * 40

    result = heuristic_classification(content)

    assert result.summary.endswith("...")
    assert len(result.summary) == 103


def test_resolve_room_first_match_wins(rooms):
    assert resolve_room("ideas", rooms) == "room_ideas"
    assert resolve_room("LEARNING", rooms) == "room_learning"
    assert resolve_room("o", rooms) == "room_work"
    assert resolve_room("Garden", rooms) is None
    assert resolve_room(None, rooms) is None
    assert resolve_room("", rooms) is None
