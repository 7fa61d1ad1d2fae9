"""Weekly mood insight.

Uses its own 7-day lookback over every mood entry in the snapshot,
independent of the window selected on the dashboard.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

import numpy as np

from wellboard.records import MoodEntry

INSIGHT_LOOKBACK_DAYS = 7
MIN_INSIGHT_ENTRIES = 2
AFFIRMING_THRESHOLD = 7.5

LOG_MORE_MESSAGE = "Log your mood a couple more times this week for a personalized insight!"
AFFIRMING_TEMPLATE = (
    "Your average mood this week was {average:.1f}/10. "
    "It looks like you've had a fantastic week!"
)
CHECK_IN_TEMPLATE = (
    "Your average mood this week was {average:.1f}/10. "
    "Keep checking in with your feelings."
)


def weekly_mood(entries: Sequence[MoodEntry], today: date | None = None) -> list[MoodEntry]:
    """Entries dated within the last seven days, today included."""
    today = today or date.today()
    first_day = today - timedelta(days=INSIGHT_LOOKBACK_DAYS - 1)
    return [e for e in entries if e.date >= first_day]


def weekly_mood_average(entries: Sequence[MoodEntry], today: date | None = None) -> float | None:
    """Mean of the last week's scores; None below the minimum count.

    Unrounded: the threshold is compared against the exact mean and the
    templates round to one decimal only for display.
    """
    recent = weekly_mood(entries, today)
    if len(recent) < MIN_INSIGHT_ENTRIES:
        return None
    return float(np.mean([e.score for e in recent]))


def weekly_insight(entries: Sequence[MoodEntry], today: date | None = None) -> str:
    """Pick the weekly insight message for a user's mood entries."""
    average = weekly_mood_average(entries, today)
    if average is None:
        return LOG_MORE_MESSAGE
    if average >= AFFIRMING_THRESHOLD:
        return AFFIRMING_TEMPLATE.format(average=average)
    return CHECK_IN_TEMPLATE.format(average=average)
