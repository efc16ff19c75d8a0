"""
Rule-based insight generators.

Each generator is a pure function of the generation context and returns
at most one insight per call. "Not enough data" and "nothing interesting"
are both reported as NotApplicable.
"""

import logging
from collections import Counter
from typing import List, Optional

from memory_palace.insights.models import (
    Found,
    GenerationContext,
    GeneratorOutcome,
    NotApplicable,
    make_insight,
)
from memory_palace.models import Memory
from memory_palace.utils.dates import days_between, same_calendar_day, time_ago_label
from memory_palace.utils.text import ellipsize

logger = logging.getLogger(__name__)


def _preview(memory: Memory, limit: int) -> str:
    return ellipsize(memory.summary or memory.content, limit)


def pick_partner(
    anchor: Memory,
    shuffled: List[Memory],
    ctx: GenerationContext,
    require_other_room: bool = False,
) -> Optional[Memory]:
    """
    Pick a memory to pair with ``anchor``.

    Prefers a memory sharing no tags with the anchor (and, when
    ``require_other_room`` is set, living in a different room). Falls back
    to the first shuffled memory that isn't the anchor itself.
    """
    others = [m for m in shuffled if m.id != anchor.id]
    anchor_tags = set(anchor.tags)
    anchor_room = ctx.effective_room(anchor)
    for memory in others:
        if anchor_tags & set(memory.tags):
            continue
        if require_other_room and ctx.effective_room(memory) == anchor_room:
            continue
        return memory
    return others[0] if others else None


class OnThisDayGenerator:
    """Resurface a memory recorded on today's date in an earlier year."""

    kind = "on_this_day"
    requires_llm = False
    min_age_days = 7

    def generate(self, ctx: GenerationContext) -> GeneratorOutcome:
        matches = [
            m
            for m in ctx.memories
            if same_calendar_day(m.created_at, ctx.now)
            and days_between(m.created_at, ctx.now) >= self.min_age_days
        ]
        if not matches:
            return NotApplicable("no memories from this calendar day")

        memory = ctx.rng.choice(matches)
        label = time_ago_label(days_between(memory.created_at, ctx.now))
        return Found(
            make_insight(
                "on_this_day",
                title=f"On This Day ({label})",
                body=memory.summary or ellipsize(memory.content, 120),
                related_memory_ids=[memory.id],
            )
        )


class ForgottenGemGenerator:
    """Surface one of the oldest memories."""

    kind = "forgotten_gem"
    requires_llm = False
    min_memories = 5
    min_age_days = 14

    def generate(self, ctx: GenerationContext) -> GeneratorOutcome:
        if len(ctx.memories) < self.min_memories:
            return NotApplicable(f"fewer than {self.min_memories} memories")

        old = sorted(
            (m for m in ctx.memories if days_between(m.created_at, ctx.now) > self.min_age_days),
            key=lambda m: m.created_at,
        )
        if not old:
            return NotApplicable(f"no memories older than {self.min_age_days} days")

        pool = old[: max(1, len(old) // 3)]
        memory = ctx.rng.choice(pool)
        return Found(
            make_insight(
                "forgotten_gem",
                title="Forgotten Gem",
                body=f'You thought about this a while back: "{_preview(memory, 100)}" - still relevant?',
                related_memory_ids=[memory.id],
            )
        )


class PatternGenerator:
    """Point out a tag that keeps coming up in recent memories."""

    kind = "pattern"
    requires_llm = False
    min_memories = 3
    window = 20
    min_count = 3
    max_related = 3

    def generate(self, ctx: GenerationContext) -> GeneratorOutcome:
        if len(ctx.memories) < self.min_memories:
            return NotApplicable(f"fewer than {self.min_memories} memories")

        recent = ctx.most_recent(self.window)
        counts = Counter(tag for m in recent for tag in m.tags)
        # most_common is stable, so the first-seen tag wins ties
        top = [(tag, n) for tag, n in counts.most_common() if n >= self.min_count]
        if not top:
            return NotApplicable("no recurring tags")

        tag, count = top[0]
        related = [m.id for m in recent if tag in m.tags][: self.max_related]
        return Found(
            make_insight(
                "pattern",
                title="Thinking Pattern",
                body=(
                    f'"{tag}" keeps coming up in your thoughts ({count} times recently). '
                    "Seems like something important to you."
                ),
                related_memory_ids=related,
            )
        )


class NudgeGenerator:
    """Nudge the user back towards a room that has gone quiet."""

    kind = "nudge"
    requires_llm = False
    stale_after_days = 7

    def generate(self, ctx: GenerationContext) -> GeneratorOutcome:
        if not ctx.rooms:
            return NotApplicable("no rooms")

        neglected = []
        for room in ctx.rooms:
            members = [m for m in ctx.memories if m.room_id == room.id]
            if not members:
                continue
            last_activity = max(m.created_at for m in members)
            if days_between(last_activity, ctx.now) > self.stale_after_days:
                neglected.append((last_activity, room, len(members)))

        if not neglected:
            return NotApplicable("every active room is fresh")

        neglected.sort(key=lambda entry: entry[0])
        last_activity, room, member_count = neglected[0]
        days_ago = days_between(last_activity, ctx.now)
        return Found(
            make_insight(
                "nudge",
                title="Missing You",
                body=(
                    f'Your "{room.name}" room has {member_count} memories but hasn\'t seen you '
                    f"in {days_ago} days. Any new thoughts?"
                ),
            )
        )


class MashupGenerator:
    """Suggest combining two unrelated memories."""

    kind = "mashup"
    requires_llm = False
    min_memories = 4

    def generate(self, ctx: GenerationContext) -> GeneratorOutcome:
        if len(ctx.memories) < self.min_memories:
            return NotApplicable(f"fewer than {self.min_memories} memories")

        shuffled = ctx.shuffled()
        anchor = shuffled[0]
        partner = pick_partner(anchor, shuffled, ctx, require_other_room=True)
        if partner is None:
            return NotApplicable("no partner memory")

        topic_a = anchor.tags[0] if anchor.tags else "idea"
        topic_b = partner.tags[0] if partner.tags else "thought"
        return Found(
            make_insight(
                "mashup",
                title="Idea Mashup",
                body=(
                    f'What if you combined "{topic_a}" with "{topic_b}"? '
                    "Sometimes the best ideas come from unexpected connections."
                ),
                related_memory_ids=[anchor.id, partner.id],
            )
        )


QUESTION_TEMPLATES = [
    # (template, phrase used for {tag} when no recent memory has tags)
    ("What's one thing about {tag} that you haven't explored yet?", "your recent thinking"),
    ("If you could only keep 3 of your recent ideas, which would they be?", None),
    ("What would your past self from a month ago think about your current focus?", None),
    ('Is there someone you should share your "{tag}" thoughts with?', "latest"),
    ("What's the boldest next step you could take on your recent ideas?", None),
    ('What assumption are you making about "{tag}" that might be wrong?', "things"),
    ("If you had unlimited resources, how would you act on your recent thoughts?", None),
]


class QuestionGenerator:
    """Ask a thought-provoking question about a recent topic."""

    kind = "question"
    requires_llm = False
    window = 10

    def generate(self, ctx: GenerationContext) -> GeneratorOutcome:
        if not ctx.memories:
            return NotApplicable("no memories")

        recent = ctx.most_recent(self.window)
        tags = list(dict.fromkeys(tag for m in recent for tag in m.tags))
        template, fallback = ctx.rng.choice(QUESTION_TEMPLATES)
        question = template.format(tag=ctx.rng.choice(tags) if tags else fallback)
        return Found(
            make_insight(
                "question",
                title="Think About This",
                body=question,
                related_memory_ids=[m.id for m in recent[:2]],
            )
        )


def rule_based_generators() -> list:
    """The six generators that never need a language model."""
    return [
        OnThisDayGenerator(),
        ForgottenGemGenerator(),
        PatternGenerator(),
        NudgeGenerator(),
        MashupGenerator(),
        QuestionGenerator(),
    ]
