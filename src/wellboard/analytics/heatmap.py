"""Current-month mood heatmap.

The grid always covers the calendar month containing *today*, whatever
window is selected.  It starts with ``start_day_of_week`` empty padding
cells (weeks start on Sunday, column 0) so that day 1 lands under its
weekday, then holds one cell per day of the month.

Scores come from folding *all* mood entries in store order into a
date -> score map; a later entry for the same date overwrites an earlier
one.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Sequence

from wellboard.analytics.series import format_day
from wellboard.records import MoodEntry


class MoodBucket(str, Enum):
    """Colour tier for a heatmap cell."""

    STRONGLY_POSITIVE = "strongly_positive"
    POSITIVE = "positive"
    NEUTRAL_POSITIVE = "neutral_positive"
    NEUTRAL_NEGATIVE = "neutral_negative"
    NEGATIVE = "negative"
    UNKNOWN = "unknown"


# Evaluated high to low; first match wins.  Anything above 0 that misses
# every row is NEGATIVE; no score at all is UNKNOWN.
BUCKET_THRESHOLDS = [
    (8, MoodBucket.STRONGLY_POSITIVE),
    (6, MoodBucket.POSITIVE),
    (5, MoodBucket.NEUTRAL_POSITIVE),
    (3, MoodBucket.NEUTRAL_NEGATIVE),
]


def mood_bucket(score: float | None) -> MoodBucket:
    """Map a mood score to its heatmap bucket."""
    if score is None:
        return MoodBucket.UNKNOWN
    for threshold, bucket in BUCKET_THRESHOLDS:
        if score >= threshold:
            return bucket
    if score > 0:
        return MoodBucket.NEGATIVE
    return MoodBucket.UNKNOWN


@dataclass(frozen=True)
class HeatmapCell:
    """One real day of the month."""

    date: date
    mood_score: int | None
    bucket: MoodBucket

    @property
    def tooltip(self) -> str:
        score = f"{self.mood_score}/10" if self.mood_score else "N/A"
        return f"{format_day(self.date)}: {score}"


@dataclass
class HeatmapGrid:
    """Padding cells (None) followed by one cell per day."""

    year: int
    month: int
    start_day_of_week: int  # 0 = Sunday
    days_in_month: int
    cells: list[HeatmapCell | None] = field(default_factory=list)

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} Mood Map"

    def weeks(self) -> list[list[HeatmapCell | None]]:
        """Cells split into rows of seven (the last row may be shorter)."""
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "year": self.year,
            "month": self.month,
            "start_day_of_week": self.start_day_of_week,
            "days_in_month": self.days_in_month,
            "cells": [
                None if c is None else {
                    "date": c.date.isoformat(),
                    "mood_score": c.mood_score,
                    "bucket": c.bucket.value,
                    "tooltip": c.tooltip,
                }
                for c in self.cells
            ],
        }

    def __repr__(self) -> str:
        filled = sum(1 for c in self.cells if c is not None and c.mood_score is not None)
        return f"HeatmapGrid({self.year}-{self.month:02d}, {filled}/{self.days_in_month} days scored)"


def mood_by_date(entries: Sequence[MoodEntry]) -> dict[date, int]:
    """Fold entries into date -> score; later entries win."""
    scores: dict[date, int] = {}
    for e in entries:
        scores[e.date] = e.score
    return scores


def build_heatmap(entries: Sequence[MoodEntry], today: date | None = None) -> HeatmapGrid:
    """Project mood entries onto the current month's calendar grid."""
    today = today or date.today()
    year, month = today.year, today.month

    first_weekday, days_in_month = calendar.monthrange(year, month)
    # calendar counts Monday as 0; the grid starts on Sunday.
    start_day_of_week = (first_weekday + 1) % 7

    scores = mood_by_date(entries)

    cells: list[HeatmapCell | None] = [None] * start_day_of_week
    for day in range(1, days_in_month + 1):
        d = date(year, month, day)
        score = scores.get(d)
        cells.append(HeatmapCell(date=d, mood_score=score, bucket=mood_bucket(score)))

    return HeatmapGrid(
        year=year,
        month=month,
        start_day_of_week=start_day_of_week,
        days_in_month=days_in_month,
        cells=cells,
    )
