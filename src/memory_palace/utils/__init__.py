"""Utility functions for memory-palace."""

from memory_palace.utils.dates import days_between, same_calendar_day, time_ago_label
from memory_palace.utils.text import ellipsize, jaccard, keyword_set, keywords, top_keywords

__all__ = [
    "days_between",
    "same_calendar_day",
    "time_ago_label",
    "ellipsize",
    "jaccard",
    "keyword_set",
    "keywords",
    "top_keywords",
]
