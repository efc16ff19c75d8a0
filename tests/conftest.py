"""Shared fixtures: a scripted language model gateway and memory factories."""

import random
from datetime import datetime, timedelta

import pytest

from memory_palace.llm import GatewayNotConfiguredError, GatewayRequestError
from memory_palace.models import Memory, Room

NOW = datetime(2026, 10, 17, 12, 0, 0)


class FakeGateway:
    """
    Gateway double that replays scripted replies.

    Each reply is returned in order; an Exception instance in the script is
    raised instead. Once the script runs out, ``default`` is returned.
    """

    def __init__(self, configured=True, replies=None, default="A surprising link."):
        self._configured = configured
        self.replies = list(replies or [])
        self.default = default
        self.calls = []

    def configured(self):
        return self._configured

    async def complete(self, messages, system_prompt=None):
        self.calls.append((list(messages), system_prompt))
        if not self._configured:
            raise GatewayNotConfiguredError("not configured")
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_gateway():
    """Factory for scripted gateways: ``make_gateway(replies=[...])``."""
    return FakeGateway


@pytest.fixture
def unconfigured_gateway():
    return FakeGateway(configured=False)


@pytest.fixture
def gateway():
    return FakeGateway(configured=True)


@pytest.fixture
def failing_gateway():
    return FakeGateway(configured=True, default=GatewayRequestError("upstream 503"))


@pytest.fixture
def make_memory():
    """Factory for memories created ``days_ago`` days before NOW."""
    counter = {"n": 0}

    def _make(content=None, days_ago=0, tags=None, room_id=None, summary=None, id=None):
        counter["n"] += 1
        created = NOW - timedelta(days=days_ago)
        return Memory(
            id=id or f"mem_{counter['n']}",
            content=content or f"Memory number {counter['n']}",
            summary=summary,
            tags=tags or [],
            room_id=room_id,
            created_at=created,
            updated_at=created,
        )

    return _make


@pytest.fixture
def make_room():
    def _make(name, id=None, days_ago=30):
        return Room(id=id or name.lower().replace(" ", "_"), name=name, created_at=NOW - timedelta(days=days_ago))

    return _make
