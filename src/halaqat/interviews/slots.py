"""Interview slot computation.

Interviews happen on a fixed set of weekdays (by default Saturday and Tuesday,
after the Asr prayer). Same-day scheduling is never offered so the family gets
advance notice.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Union

from ..core.constants import DEFAULT_INTERVIEW_WEEKDAYS
from ..core.enums import Weekday


@dataclass(frozen=True)
class InterviewSlot:
    date: date
    weekday: Weekday


def days_until(today: date, weekday: Weekday) -> int:
    """Days from ``today`` to the next ``weekday``; today itself counts as 7."""
    return (weekday.number - today.weekday()) % 7 or 7


def next_interview_slot(
    today: date,
    weekdays: Iterable[Union[Weekday, str]] = DEFAULT_INTERVIEW_WEEKDAYS,
) -> InterviewSlot:
    """Nearest allowed interview day strictly after ``today``.

    Ties (the same weekday listed twice) go to the entry listed first.
    """
    candidates = [
        (days_until(today, day), position, day)
        for position, day in enumerate(Weekday(w) for w in weekdays)
    ]
    if not candidates:
        raise ValueError("At least one interview weekday is required")

    days, _, weekday = min(candidates, key=lambda c: (c[0], c[1]))
    return InterviewSlot(date=today + timedelta(days=days), weekday=weekday)
