"""
Memory classification with heuristic fallback.

Turns freshly captured text into tags, a summary and a suggested room.
Uses the language model when one is configured and degrades to a
keyword heuristic on any failure, so capture is never blocked.
"""

import logging
from typing import List, Optional

from memory_palace.classification.models import ClassificationResult, MalformedAnalysis
from memory_palace.classification.parsing import parse_analysis
from memory_palace.classification.prompts import (
    MEMORY_ANALYSIS_SYSTEM_PROMPT,
    MEMORY_ANALYSIS_USER_PROMPT,
)
from memory_palace.llm import GatewayMessage, LanguageModelGateway
from memory_palace.models import Room, normalize_tags
from memory_palace.utils.text import ellipsize, top_keywords

logger = logging.getLogger(__name__)

MAX_TAGS = 5
HEURISTIC_TAG_COUNT = 4
SUMMARY_LENGTH = 100


def heuristic_classification(content: str) -> ClassificationResult:
    """
    Classify content without a language model.

    Tags are the four most frequent keywords; the summary is the first
    100 characters of the content. No room is suggested.
    """
    return ClassificationResult(
        tags=top_keywords(content, HEURISTIC_TAG_COUNT),
        summary=ellipsize(content.strip(), SUMMARY_LENGTH),
        suggested_room_id=None,
        source="heuristic",
    )


def resolve_room(suggested_room: Optional[str], rooms: List[Room]) -> Optional[str]:
    """
    Match a free-text room suggestion against existing room names.

    The suggestion matches a room whose name contains it, ignoring case.
    First match wins; no match means no room.
    """
    if not suggested_room or not suggested_room.strip():
        return None
    needle = suggested_room.strip().lower()
    for room in rooms:
        if needle in room.name.lower():
            return room.id
    return None


class MemoryClassifier:
    """
    LLM-based memory classifier with a keyword heuristic fallback.

    Never raises for non-empty content: gateway absence, upstream errors and
    malformed replies all fall back to ``heuristic_classification``.
    """

    def __init__(self, gateway: LanguageModelGateway, system_prompt: Optional[str] = None):
        """
        Initialize the classifier.

        Args:
            gateway: Language model gateway used for analysis
            system_prompt: Optional custom analysis prompt
                           (default: MEMORY_ANALYSIS_SYSTEM_PROMPT)
        """
        self.gateway = gateway
        self.system_prompt = system_prompt or MEMORY_ANALYSIS_SYSTEM_PROMPT
        self.llm_call_count = 0
        self.llm_success_count = 0
        self.llm_failure_count = 0
        self.heuristic_fallback_count = 0

        logger.info(
            f"MemoryClassifier initialized: llm_configured={gateway.configured()}, "
            f"custom_prompt={system_prompt is not None}"
        )

    async def classify(self, content: str, rooms: List[Room]) -> ClassificationResult:
        """
        Classify captured content.

        Args:
            content: Transcribed or typed text
            rooms: Existing rooms, for matching the suggested category

        Returns:
            ClassificationResult from the language model or the heuristic

        Raises:
            ValueError: If content is empty or blank
        """
        if not content or not content.strip():
            raise ValueError("Cannot classify empty content")

        if not self.gateway.configured():
            logger.debug("Language model not configured, using heuristic classification")
            return self._fallback(content)

        self.llm_call_count += 1
        try:
            reply = await self.gateway.complete(
                [GatewayMessage(role="user", text=MEMORY_ANALYSIS_USER_PROMPT.format(content=content))],
                system_prompt=self.system_prompt,
            )
        except Exception as e:
            self.llm_failure_count += 1
            logger.warning(f"Memory analysis failed: {e}. Using heuristic classification")
            return self._fallback(content)

        parsed = parse_analysis(reply)
        if isinstance(parsed, MalformedAnalysis):
            self.llm_failure_count += 1
            logger.warning(
                f"Malformed memory analysis ({parsed.reason}). Using heuristic classification"
            )
            return self._fallback(content)

        self.llm_success_count += 1
        payload = parsed.payload
        summary = payload.summary.strip() or ellipsize(content.strip(), SUMMARY_LENGTH)
        result = ClassificationResult(
            tags=normalize_tags(payload.tags)[:MAX_TAGS],
            summary=summary,
            suggested_room_id=resolve_room(payload.suggested_room, rooms),
            source="llm",
        )

        logger.debug(
            f"LLM classification: tags={result.tags}, "
            f"suggested_room={payload.suggested_room!r} -> {result.suggested_room_id}"
        )
        return result

    def _fallback(self, content: str) -> ClassificationResult:
        self.heuristic_fallback_count += 1
        return heuristic_classification(content)

    def get_metrics(self) -> dict:
        """
        Get classifier metrics.

        Returns:
            Dictionary with call counts and success rates
        """
        metrics = {
            "classifier_llm_call_count": self.llm_call_count,
            "classifier_llm_success_count": self.llm_success_count,
            "classifier_llm_failure_count": self.llm_failure_count,
            "classifier_heuristic_fallback_count": self.heuristic_fallback_count,
        }

        if self.llm_call_count > 0:
            success_rate = (self.llm_success_count / self.llm_call_count) * 100
            metrics["classifier_llm_success_rate_percent"] = round(success_rate, 2)

        return metrics
