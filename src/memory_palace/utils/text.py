"""
Text helpers shared by the heuristic tagger and the connection finder.
"""

import re
from collections import Counter
from typing import List, Set

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "can", "shall", "to", "of", "in", "for",
        "on", "with", "at", "by", "from", "it", "this", "that", "i", "me",
        "my", "we", "our", "you", "your", "he", "she", "they", "them", "and",
        "or", "but", "not", "so", "if", "about", "just", "also", "then",
        "than", "very", "really", "think", "like", "want", "know", "love",
        "feel", "some", "what", "when", "where", "there", "their", "these",
        "those", "into", "over", "much", "more", "maybe",
    }
)

MIN_KEYWORD_LENGTH = 4

_NON_LETTERS = re.compile(r"[^a-z]")


def keywords(text: str) -> List[str]:
    """
    Split text into lower-case keyword tokens.

    Tokens are whitespace-separated words with every non-letter removed.
    Stop words and tokens shorter than four letters are dropped. Order and
    repeats are preserved so callers can count frequency.
    """
    tokens = []
    for word in text.lower().split():
        clean = _NON_LETTERS.sub("", word)
        if len(clean) >= MIN_KEYWORD_LENGTH and clean not in STOP_WORDS:
            tokens.append(clean)
    return tokens


def top_keywords(text: str, limit: int = 4) -> List[str]:
    """Most frequent keywords, ties broken by first appearance."""
    return [word for word, _ in Counter(keywords(text)).most_common(limit)]


def keyword_set(text: str) -> Set[str]:
    return set(keywords(text))


def jaccard(a: Set[str], b: Set[str]) -> float:
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def ellipsize(text: str, limit: int) -> str:
    """Cut text to ``limit`` characters, appending "..." when anything was cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
