"""Scalar KPIs over a filtered view.

Empty inputs produce sentinels, never a division error.  The sentinels
are intentionally asymmetric:

    avg_mood          -> "N/A"   (explicitly unavailable)
    avg_sleep_hours   -> 0.0     (numeric zero)
    top_activity      -> "N/A"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from wellboard.analytics.window import FilteredView
from wellboard.records import ExerciseEntry, MoodEntry, SleepEntry

NO_DATA = "N/A"


@dataclass(frozen=True)
class KpiSet:
    """Summary statistics for one window."""

    avg_mood: float | str = NO_DATA
    avg_sleep_hours: float = 0.0
    total_exercise_hours: float = 0.0
    top_activity: str = NO_DATA

    @property
    def has_mood(self) -> bool:
        return self.avg_mood != NO_DATA

    def __repr__(self) -> str:
        return (
            f"KpiSet(mood={self.avg_mood}, sleep={self.avg_sleep_hours}h, "
            f"exercise={self.total_exercise_hours}h, top={self.top_activity})"
        )


def average_mood(entries: Sequence[MoodEntry]) -> float | str:
    """Mean mood score, one decimal; ``"N/A"`` if there are no entries."""
    if not entries:
        return NO_DATA
    scores = np.asarray([e.score for e in entries], dtype=np.float64)
    return round(float(np.mean(scores)), 1)


def average_sleep_hours(entries: Sequence[SleepEntry]) -> float:
    """Mean sleep duration in hours, one decimal; 0.0 if empty."""
    if not entries:
        return 0.0
    minutes = np.asarray([e.duration_minutes for e in entries], dtype=np.float64)
    return round(float(np.mean(minutes)) / 60.0, 1)


def total_exercise_hours(entries: Sequence[ExerciseEntry]) -> float:
    """Total exercise duration in hours, one decimal."""
    if not entries:
        return 0.0
    minutes = np.asarray([e.duration_minutes for e in entries], dtype=np.float64)
    return round(float(np.sum(minutes)) / 60.0, 1)


def activity_counts(entries: Sequence[ExerciseEntry]) -> dict[str, int]:
    """Occurrences per activity type, keyed in first-seen order."""
    counts: dict[str, int] = {}
    for e in entries:
        counts[e.activity_type] = counts.get(e.activity_type, 0) + 1
    return counts


def top_activity(entries: Sequence[ExerciseEntry]) -> str:
    """Most frequent activity type.

    Categories are visited in first-seen order and replace the running
    best when their count is greater than or equal to it, so a tie goes
    to the category encountered last.
    """
    counts = activity_counts(entries)
    best = NO_DATA
    best_count = 0
    for activity, count in counts.items():
        if count >= best_count:
            best, best_count = activity, count
    return best


def compute_kpis(view: FilteredView) -> KpiSet:
    """Compute every KPI for a filtered view."""
    return KpiSet(
        avg_mood=average_mood(view.mood),
        avg_sleep_hours=average_sleep_hours(view.sleep),
        total_exercise_hours=total_exercise_hours(view.exercise),
        top_activity=top_activity(view.exercise),
    )
