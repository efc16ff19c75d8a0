"""
Calendar helpers used by the insight generators.

All arithmetic works on whole days, mirroring how the home screen talks
about time ("3 weeks ago", "hasn't seen you in 12 days").
"""

import calendar
import math
from datetime import datetime

SECONDS_PER_DAY = 60 * 60 * 24


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def days_between(a: datetime, b: datetime) -> int:
    """Whole days between two timestamps, regardless of order."""
    return int(abs((a - b).total_seconds()) // SECONDS_PER_DAY)


def same_calendar_day(created: datetime, today: datetime) -> bool:
    """
    Check whether ``created`` falls on today's month and day, ignoring year.

    A Feb 29 memory is treated as Feb 28 in non-leap years so its
    anniversary still comes around.
    """
    month, day = created.month, created.day
    if month == 2 and day == 29 and not calendar.isleap(today.year):
        day = 28
    return month == today.month and day == today.day


def time_ago_label(days: int) -> str:
    """
    Render an age in days as "N weeks ago", switching to months at 4 weeks.

    Examples:
        >>> time_ago_label(14)
        '2 weeks ago'
        >>> time_ago_label(365)
        '13 months ago'
    """
    weeks = _round_half_up(days / 7)
    if weeks >= 4:
        months = _round_half_up(weeks / 4)
        return f"{months} month{'s' if months > 1 else ''} ago"
    return f"{weeks} week{'s' if weeks > 1 else ''} ago"
